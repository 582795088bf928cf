"""Fixed-width COFF record decoders."""
