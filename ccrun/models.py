from typing import Optional

class CcRunError(Exception):
    def __init__(self, message :str, hint :Optional[str]=None, exit_code :int=1):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.exit_code = exit_code

    def __str__(self)->str:
        return self.message

class EndpointNotFoundError(CcRunError):
    ...

    @classmethod
    def from_name(cls, name :str)->"EndpointNotFoundError":
        return cls(
            message=f"Error: endpoint \"{name}\" not found",
            hint="Run \"cc-run list\" to see the available endpoints"
        )

class BuiltinEndpointError(CcRunError):
    ...

    @classmethod
    def cannot_add(cls, name :str)->"BuiltinEndpointError":
        return cls(
            message=f"Error: \"{name}\" is a built-in endpoint name and cannot be used",
            hint="Pick a different name for the custom endpoint"
        )

    @classmethod
    def cannot_remove(cls, name :str)->"BuiltinEndpointError":
        return cls(
            message=f"Error: built-in endpoint \"{name}\" cannot be removed",
            hint="Only custom endpoints added with \"cc-run add\" can be removed"
        )

    @classmethod
    def reserved_command(cls, name :str)->"BuiltinEndpointError":
        return cls(
            message=f"Error: \"{name}\" is a cc-run command name and cannot be used as an endpoint name",
            hint="Pick a different name for the custom endpoint"
        )

class InvalidUrlError(CcRunError):
    ...

    @classmethod
    def from_url(cls, url :str, what :str="endpoint")->"InvalidUrlError":
        return cls(
            message=f"Error: invalid {what} URL \"{url}\"",
            hint="Use an absolute URL such as https://api.example.com/anthropic"
        )

class TokenRequiredError(CcRunError):
    ...

    @classmethod
    def from_name(cls, name :str)->"TokenRequiredError":
        return cls(
            message=f"Error: no API token provided for \"{name}\"",
            hint=f"Set one with \"cc-run token set {name}\""
        )

class PassthroughArgsError(CcRunError):
    ...

class UsageError(CcRunError):
    ...

class LaunchError(CcRunError):
    ...
