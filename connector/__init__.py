"""
Consent connector application code.

- models: User document
- schemas: Request bodies
- services: Consent manager and data provider HTTP clients, consent decryption
- pipelines: Per-endpoint orchestration
- routers: Private and public API routes
- config: Application settings

Uses generic infrastructure from the common/ package.
"""

from connector.config import settings

__all__ = ["settings"]
