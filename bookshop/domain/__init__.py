"""
Domain layer - Contains catalog entities, orders, pricing rules and events.
This layer is independent of external concerns and contains the core business logic.
"""
