"""Network components: randomness, activations and the retentive network."""
