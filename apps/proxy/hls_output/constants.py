class HLSChannelState:
    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    FAILED = "failed"
    STOPPING = "stopping"

    ACTIVE = (STARTING, RUNNING)


class StreamMode:
    PRODUCTION = "production"
    DEMO = "demo"
