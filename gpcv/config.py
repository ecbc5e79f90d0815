# gpcv/config.py
import os
import logging

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"

_BACKENDS = ("numpy",)
_FALLBACK_MODES = ("warn", "error", "ignore")
_OPTIMIZER_METHODS = ("Nelder-Mead", "Powell")


class _GPCVConfig:
    def __init__(self):
        self.version = __version__
        self.backend = None
        self.seed = 1234
        self.caches = {}
        # how marginal/mean predictions derived from a joint prediction are signalled
        self.prediction_fallback = "warn"
        self.zero_neg_variances = True
        self.optimizer_method = "Nelder-Mead"
        self.optimizer_maxeval = 1000
        # logger lives in config
        self.logger = logging.getLogger("gpcv")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(logging.INFO)

    def __str__(self):
        return (
            f"GPCVConfig("
            f"version={self.version}, "
            f"backend={self.backend}, "
            f"seed={self.seed}, "
            f"prediction_fallback={self.prediction_fallback}, "
            f"optimizer_method={self.optimizer_method}, "
            f"optimizer_maxeval={self.optimizer_maxeval}, "
            f"caches={list(self.caches.keys())})"
        )

    def __repr__(self):
        return (
            f"<GPCVConfig "
            f"version={self.version!r}, "
            f"backend={self.backend!r}, "
            f"prediction_fallback={self.prediction_fallback!r}, "
            f"optimizer_method={self.optimizer_method!r}, "
            f"optimizer_maxeval={self.optimizer_maxeval!r}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            if not hasattr(self, k):
                raise ValueError(f"Unknown configuration option: {k}")
            setattr(self, k, v)
        return self

    def clear_caches(self, name=None):
        if name is None:
            self.caches.clear()
        else:
            self.caches.pop(name, None)

    def get_prediction_fallback(self):
        if self.prediction_fallback not in _FALLBACK_MODES:
            raise ValueError(
                f"prediction_fallback must be one of {_FALLBACK_MODES}, "
                f"got {self.prediction_fallback!r}"
            )
        return self.prediction_fallback

    def get_optimizer_method(self):
        if self.optimizer_method not in _OPTIMIZER_METHODS:
            raise ValueError(
                f"optimizer_method must be one of {_OPTIMIZER_METHODS}, "
                f"got {self.optimizer_method!r}"
            )
        return self.optimizer_method


_config = _GPCVConfig()


def get_config():
    return _config


def _detect_backend():
    env = os.environ.get("GPCV_BACKEND")
    if env:
        return env
    return "numpy"


def init_backend():
    """Idempotent. Detect and store backend, set env for downstream imports."""
    if _config.backend is None:
        backend = _detect_backend()
        _config.backend = backend
        os.environ["GPCV_BACKEND"] = backend
    return _config.backend


def set_backend(backend: str):
    """Force a backend before importing gpcv.num."""
    if backend not in _BACKENDS:
        raise ValueError(f"backend must be one of {_BACKENDS}")
    _config.backend = backend
    os.environ["GPCV_BACKEND"] = backend


def get_backend():
    """Return current backend; triggers detection if not set."""
    return _config.backend or init_backend()


def clear_caches(name=None):
    _config.clear_caches(name)


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)
