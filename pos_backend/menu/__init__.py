"""
Menu catalog.

Responsibilities:
- Define the MenuItem schema and its submission validation contract.
- Provide the catalog store (list / insert / update / delete) the rest of
  the service reads from.
"""
