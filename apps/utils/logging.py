import logging
import json
import datetime


class JSONFormatter(logging.Formatter):
    """
    Production-safe JSON Formatter.
    Recursively scrubs sensitive keys from logs.
    """

    SENSITIVE_KEYS = {
        "password", "token", "access", "refresh",
        "secret", "authorization", "signature",
        "card_number", "cvv", "routing_number", "bank_account", "tax_id",
    }

    def _scrub(self, data):
        if isinstance(data, dict):
            return {
                k: "***REDACTED***" if str(k).lower() in self.SENSITIVE_KEYS else self._scrub(v)
                for k, v in data.items()
            }
        if isinstance(data, (list, tuple)):
            return [self._scrub(i) for i in data]
        return data

    def format(self, record):
        if isinstance(record.msg, dict):
            record.msg = self._scrub(record.msg)
        if isinstance(record.args, dict):
            record.args = self._scrub(record.args)

        log_record = {
            "ts": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            "lvl": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
            "path": record.pathname,
            "line": record.lineno,
        }

        # Traceability extras (logger.info(..., extra={"order_id": ...}))
        for attr in ("order_id", "order_number", "user_id", "seller_id"):
            if hasattr(record, attr):
                log_record[attr] = str(getattr(record, attr))

        if record.exc_info:
            log_record["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)
