"""Services that coordinate the store, the resolver and the validators."""
