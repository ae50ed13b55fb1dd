"""ViewModel package for send-screen UI state and command surfaces.

Call context:
    ``zsend.app.main`` builds these viewmodels and hands them to the
    host UI, which binds widget callbacks to the setters and reads derived
    properties on every redraw.

Dependencies:
    Domain rules and lightweight formatting helpers only. Adapters and
    use-case orchestration stay outside.
"""
