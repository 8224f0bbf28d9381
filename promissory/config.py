"""Configuration management for promissory.

Settings are process-wide and seeded from the environment:

- ``PROMISSORY_REDUNDANT_RESOLVE``: what to do when a settled promise is
  resolved again, one of ``ignore`` (default), ``warn`` or ``raise``.
- ``PROMISSORY_MULTICAST``: when truthy, new promises keep every attached
  continuation instead of only the latest one.
"""
import os

REDUNDANT_POLICIES = ('ignore', 'warn', 'raise')

_TRUTHY = ('1', 'true', 'yes', 'on')

redundant_resolve = 'ignore'
multicast = False


def _parse_policy(value: str) -> str:
    policy = value.strip().lower()
    if policy not in REDUNDANT_POLICIES:
        raise ValueError(
            f"Unknown redundant resolve policy: {value!r} (expected one of {', '.join(REDUNDANT_POLICIES)})"
        )
    return policy


def set_redundant_resolve(policy: str) -> None:
    """Set how redundant resolutions are surfaced."""
    global redundant_resolve
    redundant_resolve = _parse_policy(policy)


def get_redundant_resolve() -> str:
    """Get the redundant resolution policy."""
    return redundant_resolve


def set_multicast(enabled: bool) -> None:
    """Set whether new promises default to multicast continuations."""
    global multicast
    multicast = bool(enabled)


def get_multicast() -> bool:
    """Get the default continuation policy for new promises."""
    return multicast


def reset_all() -> None:
    """Reload every setting from the environment."""
    set_redundant_resolve(os.environ.get('PROMISSORY_REDUNDANT_RESOLVE', 'ignore'))
    set_multicast(os.environ.get('PROMISSORY_MULTICAST', '').strip().lower() in _TRUTHY)


reset_all()
