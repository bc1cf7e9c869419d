"""vhostkit — provision NGINX + PHP-FPM virtual hosts."""

__version__ = "0.1.0"
