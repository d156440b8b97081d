"""Alternative UI hosts for the viewer."""
