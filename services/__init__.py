"""Application services that sit between the views and the repositories."""
