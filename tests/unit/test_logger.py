import io
import logging

from docfiler.logging.logger import Log


class TestLog:
    def test_configure_writes_formatted_lines(self) -> None:
        Log._logger.handlers.clear()
        stream = io.StringIO()

        Log.configure("info", stream=stream)
        Log.info("Document 3 uploaded")
        Log.debug("hidden")

        output = stream.getvalue()
        assert "[INFO] docfiler: Document 3 uploaded" in output
        assert "hidden" not in output
        Log._logger.handlers.clear()

    def test_configure_twice_keeps_one_handler(self) -> None:
        Log._logger.handlers.clear()

        Log.configure("DEBUG", stream=io.StringIO())
        Log.configure("WARNING", stream=io.StringIO())

        assert len(Log._logger.handlers) == 1
        assert Log._logger.level == logging.WARNING
        Log._logger.handlers.clear()

    def test_exception_includes_traceback(self) -> None:
        Log._logger.handlers.clear()
        stream = io.StringIO()
        Log.configure("INFO", stream=stream)

        try:
            raise ValueError("bad metadata")
        except ValueError:
            Log.exception("Document 1 failed")

        assert "Traceback" in stream.getvalue()
        assert "ValueError: bad metadata" in stream.getvalue()
        Log._logger.handlers.clear()
