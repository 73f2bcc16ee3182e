"""Infrastructure layer: file I/O and binary decoding adapters."""
