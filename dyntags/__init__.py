"""dyntags - Rule-based mapping between folder paths and tags.

Subpackages:
    dyntags.core        constants, logging, configuration, validation
    dyntags.rules       patterns, rule models, matching, rule sets
    dyntags.transforms  text transformers and the transform pipeline

The mapper (dyntags.mapper) and the command-line host (dyntags.cli) sit
on top of these.
"""

from dyntags.core.constants import DYNTAGS_VERSION

__version__ = DYNTAGS_VERSION
