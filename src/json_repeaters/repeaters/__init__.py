"""JSON repeater declarations, lookup and structural mapping."""
