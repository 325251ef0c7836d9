"""Identity subsystem: tokens, passwords, principals and roles."""
