"""Processing stages: reading, scoring, assembly and output."""

from . import fasta
from . import metrics
from . import engine
from . import assembly
from . import output
