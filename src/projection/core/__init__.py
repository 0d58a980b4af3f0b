"""Mass scaling, projection operators and the constrained acceleration solve."""
