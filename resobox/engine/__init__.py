"""Frame composition and layout run artifacts."""
