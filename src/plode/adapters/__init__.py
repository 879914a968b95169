"""
Adapters exposing third-party graph structures as GraphViews.

- networkx: NetworkXGraph (requires the ``networkx`` extra)

Adapters are imported from their submodule so the core package does not
depend on any graph library.
"""
