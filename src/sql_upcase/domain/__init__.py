"""Domain layer: value types, host protocol, errors and the capitalization core."""
