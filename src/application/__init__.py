"""Application layer - Use cases and orchestration.

Structure:
- services/: LifecycleManager (issue, refresh, revoke, validate) and
  SessionAdminService (owner-facing session management)
- dtos/: Values returned to the presentation layer

The application layer orchestrates domain logic over repository ports.
"""
