from .schemas import address_schema, person_schema, tree_schema, weak_tree_root

__all__ = [
    "address_schema",
    "person_schema",
    "tree_schema",
    "weak_tree_root",
]
