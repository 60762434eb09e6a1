"""HTTP primitives consumed by the dispatcher: methods, headers, parameters, request."""
