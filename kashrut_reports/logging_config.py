import json
import logging


# Structured JSON logs, one object per line
class JsonFormatter(logging.Formatter):
    def format(self, record):
        json_log = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "timestamp": self.formatTime(record, self.datefmt),
            "logger": record.name,
            "module": record.module,
        }
        if hasattr(record, "props"):
            json_log.update(record.props)

        if record.exc_info:
            json_log["exception"] = self.formatException(record.exc_info)

        return json.dumps(json_log, ensure_ascii=False, default=str)


def setup_logging(level="INFO"):
    """Installs the JSON handler on the root logger. Safe to call more than once."""
    root = logging.getLogger()
    if not any(isinstance(h.formatter, JsonFormatter) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        root.addHandler(handler)
    root.setLevel(level)
    return logging.getLogger("kashrut-reports")
