"""Security adapters: JWT verification."""
