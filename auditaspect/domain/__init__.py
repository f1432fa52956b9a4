"""Domain layer: phases, value objects and the protocols the engine depends on."""
