class ForknetError(Exception):
    pass


class ConfigError(ForknetError):
    pass


class JobFileError(ForknetError):
    pass


class CommandError(ForknetError):
    def __init__(self, args, message, returncode=None, stderr=""):
        super().__init__(message)
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr
