"""Infrastructure layer: keyword sources, dialect lexing and the reference host."""
