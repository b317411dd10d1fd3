"""Mini CMS: authenticated content publishing service."""
