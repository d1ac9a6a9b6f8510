"""Application services: carts, orders, payment gateways and logging."""
