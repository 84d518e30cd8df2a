import warnings


def _deprecated(old: str, new: str, remove: str = "v0.3") -> None:
    warnings.warn(
        f"Tensor.{old} is deprecated and will be removed in {remove}; use Tensor.{new} instead.",
        DeprecationWarning,
        stacklevel=3,
    )
