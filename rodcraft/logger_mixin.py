import logging


class LoggerMixin:
    """
    Per-class logger for stateful postprocessing objects.

    The logger is named ``<module>.<ClassName>``, gets a ``NullHandler`` so
    library use stays silent, and defaults to WARNING. Passing
    ``debug=True`` attaches one formatted ``StreamHandler`` and lowers the
    level to DEBUG.

    Parameters
    ----------
    debug : bool, optional
        Enables debug-level logging output if True. Default is False.
    """

    _formatter = logging.Formatter(
        fmt=(
            "%(asctime)s [%(levelname)s] %(name)s.%(funcName)s():%(lineno)d "
            "- %(message)s"
        ),
        datefmt="%H:%M:%S",
    )

    def __init__(self, debug: bool = False):
        self._logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

        if not self._logger.handlers:
            self._logger.addHandler(logging.NullHandler())

        self._logger.setLevel(logging.WARNING)

        if debug:
            if not any(isinstance(h, logging.StreamHandler)
                       for h in self._logger.handlers):
                sh = logging.StreamHandler()
                sh.setFormatter(self._formatter)
                self._logger.addHandler(sh)
            self._logger.setLevel(logging.DEBUG)

        self._logger.debug(
            "Instantiated %s(debug=%s)", self.__class__.__name__, debug
        )

    @property
    def logger(self) -> logging.Logger:
        """The configured logger (created lazily if __init__ was skipped)."""
        if not hasattr(self, "_logger"):
            LoggerMixin.__init__(self)
        return self._logger
