"""Flask blueprints for the admin screens."""
