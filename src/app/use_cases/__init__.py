"""
Use Cases

Organized into domain folders:
- auth/: Login state machine and registration
- two_factor/: One-time code resend and verification
- password/: Password reset
- maintenance/: Token ledger sweep

Import from subdirectories for better organization.
"""
