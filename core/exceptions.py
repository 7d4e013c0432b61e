class PBError(Exception):
    """Raised for any failed request against the PocketBase API."""
