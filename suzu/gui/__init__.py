"""GUI package - interactive ipywidgets viewer.

The notebook viewer shows the current chart of a session in its viewport and
accepts the same ':verb arg ...' command lines as the console front-end.

Entry point:
    from suzu.gui.app import build_viewer
    gui = build_viewer("recording.bin")

Design principles:
- Rendering only reads the session; every mutation goes through SessionStore or the dispatcher
- One click or command is one input event; its error stays visible until the next event
"""
