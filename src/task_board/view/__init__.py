"""
Client-side board.

- board_state.py: immutable state + pure transitions
- task_view.py: optimistic update / rollback controller
- render.py: plain-text rendering
"""
