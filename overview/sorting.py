"""Ordering and capping of a user's course list."""

# preferences are written back with the displayed order, keep them small
MAX_COURSES_LIMIT = 100


def compute_current(prefix, short_name):
    """A course is current if the highlight prefix appears anywhere in its short name."""
    if not prefix or short_name is None:
        return False
    return prefix in short_name


def resolve_limit(configured_default, force_default, user_preference=None):
    """
    Decides how many courses are shown.

    :param configured_default: the site wide default, 0 means unlimited
    :param force_default: ignore the user preference if set
    :param user_preference: the users own limit, None if never saved
    :return: the effective limit, at most MAX_COURSES_LIMIT. 0 stays unlimited.
    """
    limit = configured_default
    if not force_default and user_preference is not None:
        limit = user_preference
    return min(limit, MAX_COURSES_LIMIT)


def sort_courses(courses, limit, saved_order=None):
    """
    Orders courses by the saved order first, then current courses, then the rest.

    Saved ids that are unknown or already placed are skipped.
    Courses not in the saved order keep the iteration order of `courses`.

    :param courses: mapping of course id to course
    :param limit: maximum number of courses, 0 for no limit
    :param saved_order: sequence of course ids or None
    :return: (list of courses, count)
    """
    remaining = dict(courses)
    ordered = []
    counter = 0
    for course_id in saved_order or ():
        if limit != 0 and counter >= limit:
            break
        course = remaining.pop(course_id, None)
        if course is None:
            continue
        ordered.append(course)
        counter += 1

    promoted = []
    remainder = []
    for course in remaining.values():
        if limit != 0 and counter >= limit:
            break
        if course.current:
            promoted.append(course)
        else:
            remainder.append(course)
        counter += 1

    result = ordered + promoted + remainder
    return result, len(result)
