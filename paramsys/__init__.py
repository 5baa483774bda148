"""
paramsys: run-time parameter registry for numerical programs.

The parameter system lives in paramsys.params; paramsys.state provides one
process-wide context for host programs.
"""

__version__ = "0.1"
