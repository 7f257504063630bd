"""Domain layer: enums, exceptions, state machine and tracking codes."""
