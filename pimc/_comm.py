#
#    This file is part of Pi by Monte Carlo (PIMC).
#
#    PIMC is free software: you can redistribute it and/or modify
#    it under the terms of the GNU Lesser General Public License as
#    published by the Free Software Foundation, either version 3 of
#    the License, or (at your option) any later version.
#
#    PIMC is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#    GNU Lesser General Public License for more details.
#
#    You should have received a copy of the GNU Lesser General Public
#    License along with PIMC. If not, see <http://www.gnu.org/licenses/>.
#
"""Channel between the launcher and its worker processes.

Workers push ``[KIND, pickle((lane, payload))]`` multipart messages to the
collector bound by the launcher."""
import pickle

import zmq

import pimc

# Worker messages
PROGRESS = b"P"
DONE = b"D"
ERROR = b"E"

LINGER_TIME = 1000


class Collector(object):
    """Launcher side: receives the reports of every worker."""

    def __init__(self, host="127.0.0.1"):
        self.ZMQcontext = zmq.Context()
        self.socket = self.ZMQcontext.socket(zmq.PULL)
        self.socket.setsockopt(zmq.LINGER, 0)
        self.port = self.socket.bind_to_random_port("tcp://{0}".format(host))
        self.address = "tcp://{0}:{1}".format(host, self.port)

        self.poller = zmq.Poller()
        self.poller.register(self.socket, zmq.POLLIN)
        pimc.logger.debug("Collector listening on {0}.".format(self.address))

    def receive(self, timeout):
        """Returns every message available within *timeout* seconds as a list
        of ``(kind, lane, payload)`` tuples."""
        messages = []
        socks = dict(self.poller.poll(int(timeout * 1000)))
        while self.socket in socks:
            kind, data = self.socket.recv_multipart()
            lane, payload = pickle.loads(data)
            messages.append((kind, lane, payload))
            socks = dict(self.poller.poll(0))
        return messages

    def close(self):
        self.socket.close()
        self.ZMQcontext.term()


class Reporter(object):
    """Worker side: reports the progress of one lane to the collector."""

    def __init__(self, address, lane):
        self.lane = lane
        self.ZMQcontext = zmq.Context()
        self.socket = self.ZMQcontext.socket(zmq.PUSH)
        self.socket.setsockopt(zmq.LINGER, LINGER_TIME)
        self.socket.connect(address)

    def _send(self, kind, payload):
        self.socket.send_multipart([
            kind,
            pickle.dumps((self.lane, payload), pickle.HIGHEST_PROTOCOL),
        ])

    def sendProgress(self, tally):
        self._send(PROGRESS, tally)

    def sendDone(self, tally):
        self._send(DONE, tally)

    def sendError(self, message):
        self._send(ERROR, message)

    def close(self):
        """Flushes pending messages (up to LINGER_TIME ms) and disconnects."""
        self.socket.close()
        self.ZMQcontext.term()
