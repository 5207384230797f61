"""Foundation layer: errors, configuration and logging shared by every component."""
