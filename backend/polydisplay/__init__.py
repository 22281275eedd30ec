"""polydisplay: filled polygons -> nested parallelogram display entities."""

__version__ = "0.1.0"
