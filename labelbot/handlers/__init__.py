"""
Event handlers package.

Handlers in this package are registered by labelbot.robot.Robot, keyed by
event category. Each handler exposes a handle(event, config) method taking a
normalized Event and the Configuration snapshot active for that event.
"""
