class NotFoundError(Exception):
    def __init__(self, resource_name, resource_id=None):
        self.resource_name = resource_name
        self.resource_id = resource_id

    @property
    def message(self):
        if self.resource_id is not None:
            return "No {} with id {} found".format(self.resource_name, self.resource_id)
        return "No {} found".format(self.resource_name)


class AlreadyExistsError(Exception):
    def __init__(self, resource_name):
        self.resource_name = resource_name

    @property
    def message(self):
        return "{} already exists".format(self.resource_name)


class MissingSettingError(Exception):
    """A setting that has no default was not configured"""

    def __init__(self, setting, reason):
        self.setting = setting
        self.reason = reason

    @property
    def message(self):
        return "{} did not get a value in config parameter: {}".format(
            self.reason, self.setting
        )

    def __str__(self):
        return self.message


class TrustStoreInitialisationError(Exception):
    """The Mobile-ID trust store could not be opened or parsed"""

    def __init__(self, message):
        self._message = message

    @property
    def message(self):
        return self._message

    def __str__(self):
        return self.message
