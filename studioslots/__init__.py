"""
studioslots - session availability for the studio booking form.
"""

__version__ = "0.1.0"
