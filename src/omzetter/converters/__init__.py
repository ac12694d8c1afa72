# omzetter.converters
# The built-in converter catalog. Each module registers its converters and
# creators through a `load_converters(registry)` function; see
# `omzetter.bootstrap` for how they are loaded.
