"""Contains exceptions raised when reconciling application configuration."""

from pydantic import ValidationError


class ConfigurationError(Exception):
    """Base class for invalid application configuration."""

    pass


class RequiredConfigurationElementError(ConfigurationError):
    """Raised when a required configuration element is missing."""

    def __init__(self, name: str, cli_name: str, env_name: str) -> None:
        """Initializes the exception with the name of the missing element."""
        super().__init__(f"Missing required configuration element: {name} (command line option {cli_name}, environment variable {env_name})")
        self.name = name
        self.cli_name = cli_name
        self.env_name = env_name


class GitHubTokenRequiredError(ConfigurationError):
    """Raised when an enabled feature needs a GitHub token but none is configured."""

    def __init__(self, features: list[str]) -> None:
        """Initializes the exception with the features that require a token."""
        super().__init__(f"Invalid configuration, {', '.join(features)} requires setting GITHUB_TOKEN")
        self.features = features


class InvalidConfigurationValueError(ConfigurationError):
    """Raised when a configuration element has an unusable value."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        """Initializes the exception with the offending element and value."""
        super().__init__(f"Invalid value {value!r} for {name}: {reason}")
        self.name = name
        self.value = value


class InvalidEnvironmentError(ConfigurationError):
    """Raised when environment variables cannot be parsed into settings."""

    def __init__(self, exc: ValidationError) -> None:
        """Initializes the exception from the validation errors of the settings model."""
        self.errors = [f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()]
        super().__init__(f"Invalid environment: {'; '.join(self.errors)}")
