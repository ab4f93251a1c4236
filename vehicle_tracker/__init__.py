"""Console entry point for the vehicle expense tracker."""
