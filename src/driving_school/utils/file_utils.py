"""
File operation utilities.

This module provides utilities for loading record snapshots and
exporting schedules in JSON and CSV formats.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd


logger = logging.getLogger(__name__)


def save_json(data: Any, filepath: Path) -> bool:
    """
    Save data to JSON file.

    Args:
        data: JSON-serializable data (dates are written as ISO strings)
        filepath: Path to save the JSON file

    Returns:
        True if save successful, False otherwise

    Examples:
        >>> save_json({"slots": ["08:00", "09:00"]}, Path("output/exports/slots.json"))
        True
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2, default=str)

        logger.debug(f"Saved JSON file: {filepath}")
        return True

    except (OSError, TypeError) as e:
        logger.error(f"Failed to save JSON file {filepath}: {e}", exc_info=True)
        return False


def load_json(filepath: Path) -> Optional[Dict[str, Any]]:
    """
    Load data from JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Loaded data, or None if load failed

    Examples:
        >>> data = load_json(Path("data/school.json"))
        >>> if data:
        ...     print(len(data["lessons"]))
    """
    try:
        if not filepath.exists():
            logger.warning(f"JSON file not found: {filepath}")
            return None

        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)

        logger.debug(f"Loaded JSON file: {filepath}")
        return data

    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {filepath}: {e}")
        return None

    except OSError as e:
        logger.error(f"Failed to load JSON file {filepath}: {e}", exc_info=True)
        return None


def save_csv(
    rows: Union[List[Dict[str, Any]], pd.DataFrame],
    filepath: Path,
    index: bool = False
) -> bool:
    """
    Save records to a CSV file, one row per record.

    Args:
        rows: Records to save (columns are the union of their keys),
            or a DataFrame such as a pivoted week grid
        filepath: Path to save the CSV file
        index: Whether to write the DataFrame index as the first column

    Returns:
        True if save successful, False otherwise
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        frame = rows if isinstance(rows, pd.DataFrame) else pd.DataFrame(rows)
        frame.to_csv(filepath, index=index, encoding='utf-8')

        logger.debug(f"Saved CSV file: {filepath}")
        return True

    except OSError as e:
        logger.error(f"Failed to save CSV file {filepath}: {e}", exc_info=True)
        return False


def week_grid_frame(days: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Pivot a weekly grid into a time x date table.

    Cells hold the occupying lesson id, "free" for an available slot,
    or "-" outside availability.

    Args:
        days: ScheduleDay.to_dict() entries

    Returns:
        DataFrame indexed by slot time with one column per date
    """
    records = []
    for day in days:
        for slot in day["time_slots"]:
            if slot["lesson_id"]:
                cell = slot["lesson_id"]
            elif slot["available"]:
                cell = "free"
            else:
                cell = "-"
            records.append({"date": day["date"], "time": slot["time"], "cell": cell})

    if not records:
        return pd.DataFrame()

    return pd.DataFrame(records).pivot(index="time", columns="date", values="cell")


def generate_filename(prefix: str, extension: str) -> str:
    """
    Generate timestamped filename.

    Args:
        prefix: Filename prefix
        extension: File extension (without dot)

    Returns:
        Filename with timestamp (e.g., "slots_20251101_103045.csv")
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}.{extension}"
