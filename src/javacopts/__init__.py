"""javacopts — option assembly for in-memory javac invocations.

Builds the flat list of ``javac`` argument tokens (classpath, source,
target, release) that an in-memory compiler is handed, choosing between
``--release`` and ``-source``/``-target`` according to the active JDK.
"""

from javacopts.options import OptionsBuilder as OptionsBuilder
from javacopts.options import OptionsProvider as OptionsProvider

__version__ = "0.1.0"
