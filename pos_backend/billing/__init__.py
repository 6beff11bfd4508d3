"""
Billing.

Responsibilities:
- Hold the session-scoped bill (cart, tip, discount, payment choice).
- Derive tax, tip and total deterministically from the cart.
- Simulate payment and build receipts for print or messaging.
"""
