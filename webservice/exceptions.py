from abc import abstractmethod


class _ExceptionRegistry(type):
    def __init__(cls, name, bases, attrs):
        if not hasattr(cls, 'plugins'):
            # the mount point itself sets up the registry,
            # every subclass registers under its moodle error code.
            cls.plugins = {}
        else:
            cls.plugins[attrs['code']] = cls


class MoodleException(Exception, metaclass=_ExceptionRegistry):
    @property
    @abstractmethod
    def code(self):
        pass

    def __init__(self, exception, errorcode, message, debuginfo=''):
        super().__init__(message)
        self.exception_name = exception
        self.message = message
        self.error_code = errorcode
        self.debug_message = debuginfo

    def __str__(self):
        msg = 'Moodle reported an error:' \
              '\n {} <<{}>>' \
              '\n Message: {}' \
              '\n Debug:{}'.format(self.exception_name, self.error_code, self.message, self.debug_message)
        return msg

    @classmethod
    def generate_exception(cls, exception, errorcode, message, debuginfo=''):
        try:
            return cls.plugins[errorcode](exception, errorcode, message, debuginfo)
        except KeyError:
            return cls(exception, errorcode, message, debuginfo)


class InvalidToken(MoodleException):
    code = 'invalidtoken'

    def __str__(self):
        return 'your token is invalid, check the token in your config.\n {}'.format(self.message)


class AccessException(MoodleException):
    code = 'accessexception'

    def __str__(self):
        return 'seems like you are not allowed to do this:\n {}'.format(self.message)


class AccessDenied(MoodleException):
    code = 'nopermissions'

    def __str__(self):
        return self.message


class InvalidResponse(MoodleException):
    code = 'invalidresponse'

    def __str__(self):
        return self.message + self.debug_message


class InvalidRecord(MoodleException):
    code = 'invalidrecord'

    def __str__(self):
        return self.message + self.debug_message


class InvalidParameter(MoodleException):
    code = 'invalidparameter'

    def __str__(self):
        return 'moodle rejected a parameter: {} {}'.format(self.message, self.debug_message)
