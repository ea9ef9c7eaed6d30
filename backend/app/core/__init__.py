"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: First-run admin account creation
- db: Database configuration and connection management
- logging_config: Console logging and the error-log file sink
- ratelimit: Login attempt throttling
- security: Password hashing and access tokens
"""
