"""
Restaurant point-of-sale back end.

Responsibilities:
- Manage the menu catalog through the catalog store.
- Compute session bills (tax, tip, discount) and simulate payment.
- Request AI upsell suggestions and fall back deterministically.
"""
