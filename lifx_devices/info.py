import math


class Signal:
    """
    The signal a device reports in StateHostInfo or StateWifiInfo

    Devices report this in milliwatts. Newer firmware reports an RSSI which
    becomes a negative number of decibels, older firmware reports a signal to
    noise ratio which becomes a positive one.
    """

    NO_SIGNAL = 200

    def __init__(self, milliwatts):
        self.milliwatts = milliwatts
        if milliwatts > 0:
            self.value = int(round(10 * math.log10(milliwatts)))
        else:
            self.value = self.NO_SIGNAL

    @property
    def text(self):
        value = self.value
        if value == self.NO_SIGNAL:
            return "No signal"

        if value < 0:
            if value <= -80:
                return "Very bad signal"
            elif value <= -70:
                return "Somewhat bad signal"
            elif value < -60:
                return "Alright signal"
            return "Good signal"

        if value in (4, 5):
            return "Very bad signal"
        elif 7 <= value <= 11:
            return "Somewhat bad signal"
        elif 12 <= value <= 16:
            return "Alright signal"
        elif value > 16:
            return "Good signal"
        return "No signal"

    def __str__(self):
        return f"{self.text} ({self.value})"

    def __repr__(self):
        return f"<Signal {self.value}>"


class ConnectionInfo:
    def __init__(self, signal_strength, bytes_sent, bytes_received):
        self.signal_strength = signal_strength
        self.bytes_sent = bytes_sent
        self.bytes_received = bytes_received

    @classmethod
    def from_packet(kls, pkt):
        return kls(Signal(pkt.signal), pkt.tx, pkt.rx)

    def __repr__(self):
        return (
            f"<ConnectionInfo signal={self.signal_strength}"
            f" sent={self.bytes_sent} received={self.bytes_received}>"
        )


def format_uptime(seconds):
    seconds = int(seconds)
    days, seconds = divmod(seconds, 86400)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)

    result = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        result = f"{days} days, {result}"
    return result
