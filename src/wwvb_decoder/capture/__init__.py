"""Live sample acquisition."""

from .gpio_sampler import fill_buffer_gpio

__all__ = ['fill_buffer_gpio']
