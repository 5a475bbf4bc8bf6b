# utils/json_provider.py
from datetime import date, datetime
from flask.json.provider import DefaultJSONProvider

class CustomJSONProvider(DefaultJSONProvider):
    """Custom JSON provider that formats timestamps as ISO-8601 and dates as YYYY-MM-DD"""
    sort_keys = False

    def default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, date):
            return obj.strftime('%Y-%m-%d')
        return super().default(obj)
