"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Default admin creation on first startup
- db: Database configuration and connection management
- errors: Uniform JSON error envelope and persistence error mapping
- security: Password hashing and access token issuance/verification
- timeutil: UTC clock and ISO 8601 formatting helpers
"""
