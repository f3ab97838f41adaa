"""HTTP layer: the ``/api`` router and its endpoint modules."""
