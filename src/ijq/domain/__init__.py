"""Domain layer: values, errors, protocols and events with no I/O of their own."""
