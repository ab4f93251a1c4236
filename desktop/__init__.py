"""Desktop front ends for the vehicle expense tracker."""
