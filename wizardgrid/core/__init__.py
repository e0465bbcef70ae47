"""Core systems: data types, events and the state snapshot."""
