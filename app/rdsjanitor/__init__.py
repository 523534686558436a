"""rdsjanitor - profile and session housekeeping for Windows RDS hosts.

Audits and reclaims stale local fallback profiles, manages disconnected
logon sessions and reports on FSLogix profile container health.
"""

__version__ = "0.4.0"
