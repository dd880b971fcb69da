"""
Core domain models, rank arithmetic and contracts.

This module contains the foundational building blocks that are independent
of the document store (CMS) holding the ranked records.
"""
