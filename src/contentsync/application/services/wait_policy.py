"""Wait-mode policy for page submissions."""


def choose_wait_mode(batch_size: int, caller_override: bool | None = None) -> bool:
    """Decide whether a submission asks the API to finish processing first.

    An explicit override wins. Otherwise multi-page submissions wait and
    single pages are fire-and-forget.
    """
    if caller_override is not None:
        return caller_override
    return batch_size > 1
