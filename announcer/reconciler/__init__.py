"""Feed reconciliation: decide what to post, update or skip."""
