"""Category-dependent stencil tables."""
