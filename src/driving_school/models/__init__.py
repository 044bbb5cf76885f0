"""Record models for students, instructors, vehicles and lessons."""
