"""
Resolver Service package.

Resolves a single entity by identifier, read-through a cache in front of
an authoritative store. It provides:

- app.resolver: the resolution operation and cache key derivation.
- app.models: the Entity model and its cache encoding.
- app.cache: cache interface, no-op and best-effort adapters, Redis cache.
- app.store: store interface, in-memory and PostgreSQL stores.
- app.main: API surface for entity lookup and health.

Guidelines:
- The resolver is stateless; collaborators are passed in on every call.
- Cache failures degrade to a miss or a skipped write, never to an error.
- Store failures always reach the caller.
"""
