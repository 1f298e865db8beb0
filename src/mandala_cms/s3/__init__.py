"""S3 object operations and URL mapping for uploaded media."""
