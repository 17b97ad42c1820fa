from collections.abc import Mapping, Sequence, Sized

from webservice.fieldnames import JsonFieldNames as Jn

import logging

log = logging.getLogger('webservice.responses')


class JsonWrapper(Sized):
    def __len__(self):
        return len(self._data)

    def __init__(self, json):
        self._data = json

    @property
    def raw(self): return self._data


class JsonListWrapper(JsonWrapper, Sequence):
    def __getitem__(self, index):
        return self._data[index]

    def __init__(self, json_list):
        if not issubclass(type(json_list), Sequence):
            raise TypeError(f'received type {type(json_list)}, expected Sequence')
        super().__init__(json_list)

    def __iter__(self):
        raise NotImplementedError('__iter__')


class JsonDictWrapper(JsonWrapper, Mapping):
    def __iter__(self):
        return iter(self._data)

    def __getitem__(self, key):
        """
            Search for key.
            KeyError will be thrown, if the key cannot be found.
        """
        return self._data[key]

    def __init__(self, json_dict):
        if not issubclass(type(json_dict), Mapping):
            raise TypeError(f'received type {type(json_dict)}, expected Mapping')
        super().__init__(json_dict)

    __marker = object()

    def get(self, key, default=__marker):
        try:
            return self._data[key]
        except KeyError:
            if default is self.__marker:
                raise
            else:
                return default


class WarningList(JsonListWrapper):
    def __iter__(self):
        for warning in self._data:
            yield self.Warning(warning)

    def log_all(self):
        for warning in self:
            log.warning(f'{warning.item_id}: {warning.message}')

    class Warning(JsonDictWrapper):
        """    item string  Optional //item
            itemid int  Optional //item id
            warningcode string   //the warning code can be used by the client app to implement specific behaviour
            message string   //untranslated english message to explain the warning"""

        @property
        def item_id(self): return self.get(Jn.item_id, None)

        @property
        def warning_code(self): return self[Jn.warning_code]

        @property
        def message(self): return self[Jn.message]


class CourseListResponse(JsonListWrapper):
    def __iter__(self):
        for course in self._data:
            yield self.Course(course)

    class Course(JsonDictWrapper):
        """ optional:
                summary string  Optional //summary
                format string  Optional //course format: weeks, topics, social, site
                lang string  Optional //forced course language
        """

        @property
        def id(self): return self[Jn.id]

        @property
        def short_name(self): return self[Jn.short_name]

        @property
        def full_name(self): return self[Jn.full_name]

        @property
        def visible(self): return self.get(Jn.visible, 1)

        def __str__(self): return f'{self.full_name[0:39]:40} id:{self.id:5d} short: {self.short_name}'


class PreferenceListResponse(JsonDictWrapper):
    """core_user_get_user_preferences, values are always strings or null."""

    @property
    def warnings(self): return WarningList(self.get(Jn.warnings, []))

    @property
    def preferences(self):
        return {p[Jn.name]: p[Jn.value] for p in self.get(Jn.preferences, [])}

    def value(self, name, default=None):
        self.warnings.log_all()
        value = self.preferences.get(name, None)
        if value is None:
            return default
        return value
