"""HTTP API for the TV client and the CMS."""
