"""Feed subscription core: users, sources, cached content and subscriptions."""
