"""HTTP presentation layer over a GameSession."""
