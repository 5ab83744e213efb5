"""Back-office state orchestration engine.

Owns the mutable domain state of one authenticated staff session: inventory,
cart, orders, discounts, inquiries, users, emails and notifications.
"""
