"""
gedcom_validator: reads a GEDCOM-style family file, builds individuals and
families, and reports date, age and relationship inconsistencies.
"""

__version__ = "0.1.0"
