"""
Viewer-side logic of the canvas journal.

Modules:
    loader    pick the data source and fetch the payload (httpx)
    state     CanvasState: visible hotspots and the sequence cursor
    viewport  Viewport protocol and fit / focus transforms
    modal     text / image / video modal variants and their lifecycle
    design    drag, resize, add and rename hotspots; JSON output
    app       CanvasApp controller and keyboard bindings
"""
