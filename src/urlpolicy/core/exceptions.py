class URLPolicyError(Exception):
    pass

class InvalidRuleError(URLPolicyError):
    """A predicate or classifier registered with a builder is unusable."""
    pass

class ConfigError(URLPolicyError):
    pass

class InvalidPolicyError(ConfigError):
    """Policy file parsed but its structure is invalid."""
    pass
