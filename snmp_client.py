import asyncio
import logging

import pysnmp.hlapi.v3arch.asyncio as hlapi
from pysnmp.error import PySnmpError
from pysnmp.proto import rfc1905

log = logging.getLogger(__name__)

AUTH_PROTOCOLS = {
    'MD5': hlapi.USM_AUTH_HMAC96_MD5,
    'SHA': hlapi.USM_AUTH_HMAC96_SHA,
}
PRIV_PROTOCOLS = {
    'DES': hlapi.USM_PRIV_CBC56_DES,
    'AES': hlapi.USM_PRIV_CFB128_AES,
}

# Values an agent answers with when the OID is not there
MISSING_VALUES = (rfc1905.NoSuchObject, rfc1905.NoSuchInstance, rfc1905.EndOfMibView)


class SnmpError(Exception):
    pass


def community_credentials(community, version=2):
    return hlapi.CommunityData(community, mpModel=0 if version == 1 else 1)


def usm_credentials(user, auth_protocol=None, auth_key=None, priv_protocol=None, priv_key=None):
    kwargs = {}
    if auth_protocol:
        kwargs['authKey'] = auth_key
        kwargs['authProtocol'] = AUTH_PROTOCOLS[auth_protocol.upper()]
    if priv_protocol:
        kwargs['privKey'] = priv_key
        kwargs['privProtocol'] = PRIV_PROTOCOLS[priv_protocol.upper()]
    return hlapi.UsmUserData(user, **kwargs)


def construct_object_types(list_of_oids):
    object_types = []
    for oid in list_of_oids:
        object_types.append(hlapi.ObjectType(hlapi.ObjectIdentity(oid)))
    return object_types


def cast(value):
    if isinstance(value, MISSING_VALUES):
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        try:
            return float(value)
        except (ValueError, TypeError):
            return str(value)


class SnmpClient:
    def __init__(self, host, credentials, port=161, timeout=10, retries=1):
        self.host = host
        self.credentials = credentials
        self.port = port
        self.timeout = timeout
        self.retries = retries

    def get(self, oids):
        """Return {oid: value} for the requested scalars, None for missing ones."""
        oids = list(oids)
        log.debug('GET %s:%s %s', self.host, self.port, ' '.join(oids))
        return asyncio.run(self._get(oids))

    def get_value(self, oid):
        return self.get([oid])[oid]

    def walk(self, oid):
        """Return {oid: value} for every instance below the given table or column."""
        log.debug('WALK %s:%s %s', self.host, self.port, oid)
        return asyncio.run(self._walk(oid))

    async def _target(self):
        try:
            return await hlapi.UdpTransportTarget.create(
                (self.host, self.port), timeout=self.timeout, retries=self.retries)
        except PySnmpError as err:
            raise SnmpError(str(err)) from err

    async def _get(self, oids):
        engine = hlapi.SnmpEngine()
        try:
            target = await self._target()
            response = await hlapi.get_cmd(
                engine,
                self.credentials,
                target,
                hlapi.ContextData(),
                *construct_object_types(oids),
                lookupMib=False
            )
            return self.fetch(*response)
        finally:
            engine.close_dispatcher()

    async def _walk(self, oid):
        engine = hlapi.SnmpEngine()
        result = {}
        try:
            target = await self._target()
            async for response in hlapi.walk_cmd(
                    engine,
                    self.credentials,
                    target,
                    hlapi.ContextData(),
                    hlapi.ObjectType(hlapi.ObjectIdentity(oid)),
                    lexicographicMode=False,
                    lookupMib=False):
                for key, value in self.fetch(*response).items():
                    if value is not None:
                        result[key] = value
        finally:
            engine.close_dispatcher()
        return result

    @staticmethod
    def fetch(error_indication, error_status, error_index, var_binds):
        if error_indication:
            raise SnmpError(str(error_indication))
        if error_status:
            raise SnmpError('%s at %s' % (error_status.prettyPrint(),
                                          var_binds[int(error_index) - 1][0] if error_index else '?'))
        items = {}
        for var_bind in var_binds:
            items[str(var_bind[0])] = cast(var_bind[1])
            log.debug('%s = %s', var_bind[0], items[str(var_bind[0])])
        return items
