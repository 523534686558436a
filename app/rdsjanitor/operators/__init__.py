"""Operators for executing profile removal and session logoff actions.

This module provides the abstract operator and its concrete
implementations for the profile registry and the logoff command.
"""

from rdsjanitor.operators.base import Operator
from rdsjanitor.operators.profiles import ProfileOperator
from rdsjanitor.operators.sessions import SessionOperator

__all__ = ["Operator", "ProfileOperator", "SessionOperator"]
