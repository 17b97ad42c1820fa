import json
import logging
import os

from pathlib import Path

from webservice.fieldnames import ConfigNames as Cn
from webservice.models import JsonDictWrapper
from webservice.parsers import parse_course_limit

log = logging.getLogger('persistence.config')

DEFAULT_MAX_COURSES = 10


class BlockConfig(JsonDictWrapper):
    @property
    def default_max_courses(self):
        limit = parse_course_limit(self.get(Cn.default_max_courses, None))
        if limit is None:
            return DEFAULT_MAX_COURSES
        return limit

    @property
    def force_default_max_courses(self):
        value = self.get(Cn.force_default_max_courses, False)
        # moodle settings come as '0' and '1'
        if isinstance(value, str):
            return value.strip().lower() not in ('', '0', 'false', 'no')
        return bool(value)

    @property
    def highlight_prefix(self): return self.get(Cn.highlight_prefix, None) or ''

    @property
    def preferences_file(self): return self.get(Cn.preferences_file, None)

    @property
    def url(self):
        try:
            return self[Cn.url]
        except KeyError:
            url_not_found_msg = """
            'url' couldn't be found in your config file.
            Add the location of your moodle, like "moodle.hostname.org/moodle".
            """
            raise SystemExit(url_not_found_msg)

    @property
    def token(self):
        try:
            return self[Cn.token]
        except KeyError:
            token_not_found_msg = """
            'token' couldn't be found in your config file.
            Add a web service token for your moodle account.
            """
            raise SystemExit(token_not_found_msg)

    @property
    def user_id(self):
        try:
            return self[Cn.user_id]
        except KeyError:
            user_id_not_found_msg = """
            'user_id' couldn't be found in your config file.
            Add your moodle user id, it is shown by core_webservice_get_site_info.
            """
            raise SystemExit(user_id_not_found_msg)

    def add_overrides(self, overrides):
        self._data.update(overrides)

    def __str__(self):
        return str(self._data)


class ConfigFiles:
    GLOBAL_CONFIG_NAME = 'courseoverview'
    LOCAL_CONFIG_NAME = '.courseoverview'

    @classmethod
    def global_config_locations(cls):
        locations = [
            Path.home() / '.config' / cls.GLOBAL_CONFIG_NAME,
            Path.home() / ('.' + cls.GLOBAL_CONFIG_NAME),
        ]
        try:
            xdg = Path(os.environ['XDG_CONFIG_HOME']) / cls.GLOBAL_CONFIG_NAME
            locations = [xdg] + locations
        except KeyError:
            pass
        return locations

    @classmethod
    def get_global_config_filename(cls):
        for path in cls.global_config_locations():
            if path.is_file():
                return path
        return None

    @classmethod
    def get_local_config_filename(cls, cwd=None):
        config = Path(cwd or Path.cwd()) / cls.LOCAL_CONFIG_NAME
        if not config.is_file():
            return None
        return config

    @classmethod
    def get_config_file_list(cls, cwd=None):
        # order is crucial: local config overrides global
        files = [cls.get_global_config_filename(), cls.get_local_config_filename(cwd)]
        return [f for f in files if f is not None]


def _load_json_file(filename):
    try:
        with open(filename) as file:
            return json.load(file)
    except json.JSONDecodeError as e:
        log.warning(f'skipping config {filename}, not valid json: {e}')
        return None


def load_config(file_names=None, overrides=None):
    """
    Reads the block configuration.

    :param file_names: config files to merge, later files win. Defaults to global, then local config.
    :param overrides: dict of values that win over every file.
    :return: BlockConfig
    """
    if file_names is None:
        file_names = ConfigFiles.get_config_file_list()
    config = BlockConfig({})
    for name in file_names:
        values = _load_json_file(name)
        if values is None:
            continue
        if not isinstance(values, dict):
            log.warning(f'skipping config {name}, expected a json object')
            continue
        config.add_overrides(values)
    if overrides:
        config.add_overrides(overrides)
    return config
