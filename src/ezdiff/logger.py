"""Contains the logger of ezdiff modules.

``ezdiff`` uses the `Logging <https://docs.python.org/3/library/logging.html>`__
standard library and never installs handlers of its own. Messages are emitted at the
following levels:

* ``DEBUG``: Changes of the active :class:`~ezdiff.context.Context`.
* ``INFO``: Results printed by the demonstration program.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``ezdiff.logger.ezdiff_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""

import logging

logger_name = "ezdiff"
ezdiff_logger = logging.getLogger(logger_name)
