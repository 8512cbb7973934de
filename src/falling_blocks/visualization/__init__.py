"""pygame frontend: renderer, timer-backed tick scheduler and the play loop."""
