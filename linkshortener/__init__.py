"""URL-shortening service: alias generation, mapping storage and redirects."""
