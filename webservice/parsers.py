import json
import logging
import re

log = logging.getLogger('webservice.parsers')

mlang_tags = re.compile(r'\{mlang\s*(\w{2})\}')


def strip_mlang(string, preferred_lang='en'):
    """
    Strips all {mlang} tags from a string.
    Also strips content between tags except for tags matching preferred_lang.

    :param string: The string, possibly containing mlang tags
    :param preferred_lang: Strip all mlang content except this, default: en
    :return: stripped text, free of mlang tags, only containing preferred_lang content.
    """
    lang_set = set(mlang_tags.findall(string))

    # if there is more than one language, discard all but preferred_lang
    if len(lang_set) > 1:
        lang_set.discard(preferred_lang)
        discard_mlang = '|'.join(lang_set)
        pattern = re.compile(r'((?=\{mlang (' + discard_mlang + r')\})(.*?)\{mlang\})+?', flags=re.S)
        string = pattern.sub('', string)

    strip_mlang_tag = re.compile(r'(\s*\{mlang.*?\}\s*)+?')
    return strip_mlang_tag.sub('', string)


def normalize_course_id(course_id):
    """Moodle hands out ids as ints, but serialized orders and tree keys often carry them as strings."""
    if isinstance(course_id, str) and re.fullmatch(r'-?\d+', course_id.strip()):
        return int(course_id)
    return course_id


def parse_course_limit(raw):
    """
    Converts an int-like preference or config value into a course limit.

    :param raw: int, or a string like '10'. None stands for "not set".
    :return: a non-negative int, or None if the value is missing or unusable.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        log.warning(f'ignoring boolean course limit: {raw}')
        return None
    try:
        limit = int(str(raw).strip())
    except ValueError:
        log.warning(f'ignoring course limit, not a number: {raw!r}')
        return None
    if limit < 0:
        log.warning(f'ignoring negative course limit: {limit:d}')
        return None
    return limit


_php_array = re.compile(r'^a:(?P<count>\d+):\{(?P<body>.*)\}$', flags=re.S)
_php_scalar = re.compile(rb'i:(?P<int>-?\d+);|s:(?P<length>\d+):"')


def _php_scalars(body):
    """Splits the body of a serialized php array into its int and string scalars."""
    # php counts string length in bytes
    encoded = body.encode('utf-8')
    values = []
    pos = 0
    while pos < len(encoded):
        match = _php_scalar.match(encoded, pos)
        if match is None:
            raise ValueError(f'unexpected token in serialized array at byte {pos:d}')
        if match.group('int') is not None:
            values.append(int(match.group('int')))
            pos = match.end()
        else:
            start = match.end()
            end = start + int(match.group('length'))
            if encoded[end:end + 2] != b'";':
                raise ValueError(f'string length mismatch in serialized array at byte {start:d}')
            values.append(encoded[start:end].decode('utf-8'))
            pos = end + 2
    return values


def _decode_php_array(text):
    match = _php_array.match(text)
    if match is None:
        raise ValueError('not a serialized php array')
    scalars = _php_scalars(match.group('body'))
    count = int(match.group('count'))
    if len(scalars) != 2 * count:
        raise ValueError(f'serialized array announces {count:d} items, found {len(scalars) // 2:d}')
    # keys and values alternate, array_merge order is the value order
    return scalars[1::2]


def _encode_php_array(order):
    items = []
    for index, value in enumerate(order):
        items.append(f'i:{index:d};')
        if isinstance(value, int):
            items.append(f'i:{value:d};')
        else:
            value = str(value)
            items.append(f's:{len(value.encode("utf-8")):d}:"{value}";')
    return f'a:{len(order):d}:{{{"".join(items)}}}'


def decode_sort_order(raw):
    """
    Decodes a stored course order.

    Accepts a json list ('[3, 1]') or a php serialized array ('a:2:{i:0;i:3;i:1;i:1;}'),
    which is what the php block writes. A list is passed through.

    :param raw: the stored preference value or None
    :return: list of course ids, or None if nothing usable is stored.
    """
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        values = list(raw)
    else:
        text = str(raw).strip()
        if text == '':
            return None
        try:
            if text.startswith('['):
                values = json.loads(text)
            else:
                values = _decode_php_array(text)
        except ValueError as e:
            log.warning(f'ignoring unreadable course order {text!r}: {e}')
            return None
        if not isinstance(values, list):
            log.warning(f'ignoring course order, expected a list: {text!r}')
            return None

    order = []
    for value in values:
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            order.append(normalize_course_id(value))
        else:
            log.warning(f'ignoring course order, unexpected id {value!r}')
            return None
    return order


def encode_sort_order(order, fmt='json'):
    """
    Encodes a course order for storage.

    :param order: sequence of course ids
    :param fmt: 'json' or 'php'
    :return: the encoded string
    """
    order = list(order)
    if fmt == 'json':
        return json.dumps(order)
    if fmt == 'php':
        return _encode_php_array(order)
    raise ValueError(f'unknown sort order format: {fmt}')
