"""Base class for objects owning async resources."""


class AsyncContextManager:
    """Async context manager that calls ``close()`` on exit.

    Subclasses holding an HTTP client override ``close()``.
    """

    async def close(self) -> None:
        """Release resources. No-op by default."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
