"""Runtime layer: REST transport and the paging engine."""
