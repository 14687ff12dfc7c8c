"""Handler sequencing for the bus."""

from hooter.infrastructure.sequencing.sequencer import Handler, Sequencer, SequencerConfig

__all__ = ["Handler", "Sequencer", "SequencerConfig"]
