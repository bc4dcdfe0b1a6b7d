"""
Catalog package for the AI tools directory.

This package holds the data model (``schemas``), the in-memory
repository (``store``), its demo data (``seed``), the error types the
API translates into status codes (``errors``) and the REST routes
(``router``). The routes are mounted by ``ai_directory.main``; the
search ranking itself lives in ``ai_directory.search`` and
``ai_directory.ai``.
"""
