"""
Tests for the tree data structure.

Test organization:
- test_node.py: Node model and predicates
- test_construction.py: Tree construction and basic protocol
- test_add_child.py / test_move_nodes.py / test_delete.py: Structural mutation
- test_detach_merge.py: Subtree extraction and grafting
- test_queries.py: Lookups, relationships, put and bulk transforms
- test_traversal.py: Pre-order traversal and suspendable fold
- test_printing.py: print_tree output
- test_invariants.py: Invariants over random operation sequences
"""
