import json
import logging

from abc import ABC, abstractmethod
from pathlib import Path

from webservice.models import PreferenceListResponse

log = logging.getLogger('persistence.preferences')


class PreferenceStore(ABC):
    """Opaque key value storage of user preferences, values are strings."""
    order_format = 'json'

    @abstractmethod
    def get(self, name, default=None):
        pass

    @abstractmethod
    def set(self, name, value):
        pass


class MemoryPreferenceStore(PreferenceStore):
    def __init__(self, values=None):
        self._values = dict(values or {})

    def get(self, name, default=None):
        return self._values.get(name, default)

    def set(self, name, value):
        self._values[name] = value


class JsonFilePreferenceStore(PreferenceStore):
    def __init__(self, path):
        self.path = Path(path)

    def _read(self):
        if not self.path.is_file():
            return {}
        with open(self.path) as file:
            try:
                return json.load(file)
            except json.JSONDecodeError as e:
                log.warning(f'preferences in {self.path} are not valid json, starting over: {e}')
                return {}

    def _write(self, data):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as file:
            json.dump(data, file, indent=2, ensure_ascii=False, sort_keys=True)

    def get(self, name, default=None):
        return self._read().get(name, default)

    def set(self, name, value):
        data = self._read()
        data[name] = value
        self._write(data)


class WebServicePreferenceStore(PreferenceStore):
    """Stores preferences on the moodle server, orders are php serialized like the block does."""
    order_format = 'php'

    def __init__(self, session, user_id):
        self.session = session
        self.user_id = user_id

    def get(self, name, default=None):
        response = PreferenceListResponse(self.session.core_user_get_user_preferences(name, self.user_id))
        return response.value(name, default)

    def set(self, name, value):
        response = self.session.core_user_set_user_preferences([(name, value, self.user_id)])
        PreferenceListResponse(response).warnings.log_all()
