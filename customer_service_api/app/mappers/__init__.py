"""Translation between API schemas and stored records."""
