# Task board: two-column board with an observable store and drag-and-drop moves
#
# Components:
#   schema.py      - Data model (Task, TaskStatus)
#   state.py       - Notification store and the task store built on it
#   dnd.py         - Drag transfer protocol (payload, gesture events, state machine)
#   validation.py  - Declarative input validation
#   render.py      - Render host: templates, element tree, HTML output
#   components.py  - Task input form, task items, column views
#   app.py         - Composition root wiring one store into every view
#   config.py      - YAML configuration
#   server.py      - Flask web UI and JSON API
