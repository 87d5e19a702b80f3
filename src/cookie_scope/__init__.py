"""cookie-scope: passive checks for loosely scoped HTTP cookies."""
