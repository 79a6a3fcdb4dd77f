"""Low-level parsers shared by the format decoders."""
