from collections import namedtuple as nt

from webservice.fieldnames import JsonFieldNames as Jn
from webservice.models import JsonDictWrapper
from webservice.parsers import normalize_course_id
from overview.sorting import compute_current

SortedCourses = nt('SortedCourses', ['courses', 'count', 'ajax'])


class Course(JsonDictWrapper):
    def __init__(self, data, current=False):
        super().__init__(data)
        self._current = current

    @classmethod
    def create(cls, course_id, full_name, short_name, url, hidden=False):
        return cls({
            Jn.id: normalize_course_id(course_id),
            Jn.full_name: full_name,
            Jn.short_name: short_name,
            Jn.url: url,
            Jn.hidden: bool(hidden),
        })

    @property
    def id(self): return self[Jn.id]

    @property
    def full_name(self): return self[Jn.full_name]

    @property
    def short_name(self): return self[Jn.short_name]

    @property
    def url(self): return self[Jn.url]

    @property
    def hidden(self): return self.get(Jn.hidden, False)

    @property
    def current(self): return self._current

    def highlighted(self, prefix):
        """Returns a copy with `current` computed for the highlight prefix."""
        return Course(self._data, current=compute_current(prefix, self.short_name))

    def __eq__(self, other):
        if not isinstance(other, Course):
            return NotImplemented
        return self._data == other._data and self._current == other._current

    __hash__ = None

    def __str__(self):
        marker = '*' if self.current else ' '
        hidden = ' (hidden)' if self.hidden else ''
        return f'{marker} {self.full_name[0:39]:40} id:{self.id!s:>5} short: {self.short_name}{hidden}'

    def __repr__(self):
        return repr((self.full_name, self.id, self.short_name, self.current))


class NavigationNode(JsonDictWrapper):
    """
    One node of an exported navigation tree.

    keys follow moodles navigation_node: key, type, text, shorttext, action,
    hidden, display, isactive, forceopen and children.
    """

    @property
    def key(self): return self.get(Jn.key, None)

    @property
    def type(self): return self.get(Jn.type, None)

    @property
    def text(self): return self.get(Jn.text, '')

    @property
    def title(self): return self.get(Jn.title, self.text)

    @property
    def short_text(self): return self.get(Jn.short_text, self.text)

    @property
    def action(self): return self.get(Jn.action, None)

    @property
    def hidden(self): return bool(self.get(Jn.hidden, False))

    @property
    def display(self): return bool(self.get(Jn.display, True))

    @property
    def is_active(self): return bool(self.get(Jn.is_active, False))

    @property
    def force_open(self): return bool(self.get(Jn.force_open, False))

    @property
    def children(self): return [NavigationNode(c) for c in self.get(Jn.children, [])]

    def child(self, key):
        for node in self.children:
            if node.key == key:
                return node
        return None

    def contains_active_node(self):
        if self.is_active:
            return True
        return any(node.contains_active_node() for node in self.children)

    def find_all_of_type(self, node_type):
        found = []
        for node in self.children:
            if node.type == node_type:
                found.append(node)
            found += node.find_all_of_type(node_type)
        return found
