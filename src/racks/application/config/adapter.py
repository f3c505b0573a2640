"""Adapter between LayoutConfiguration models and domain entities.

``config_to_layout`` builds domain objects from a validated file model. It
does not audit placements: a layout whose devices collide is still returned
so that the layout validators can report every problem at once. Use
``layout_editing.require_consistent`` (or ``LayoutStore.load_layout``) before
editing such a layout.
"""

from racks.application.config.loader import ConfigError
from racks.application.config.schema import (
    DeviceTypeConfig,
    LayoutConfiguration,
    LayoutSettingsConfig,
    PlacedDeviceConfig,
    RackConfig,
)
from racks.domain.entities import DeviceType, Layout, LayoutSettings, PlacedDevice, Rack


def _device_type_from_config(config: DeviceTypeConfig) -> DeviceType:
    return DeviceType(
        slug=config.slug,
        u_height=config.u_height,
        is_full_depth=config.is_full_depth,
        airflow=config.airflow,
        manufacturer=config.manufacturer,
        model=config.model,
        colour=config.colour,
        category=config.category,
        weight=config.weight,
        weight_unit=config.weight_unit,
        comments=config.comments,
        tags=tuple(config.tags),
    )


def config_to_layout(config: LayoutConfiguration) -> Layout:
    """Convert a validated LayoutConfiguration into a domain Layout.

    Raises:
        ConfigError: With error_type "layout" if a value passes the schema
            but is rejected by a domain entity.
    """
    try:
        device_types = tuple(_device_type_from_config(dt) for dt in config.device_types)
        rack = Rack(
            name=config.rack.name,
            height=config.rack.height,
            width=config.rack.width,
            desc_units=config.rack.desc_units,
            form_factor=config.rack.form_factor,
            starting_unit=config.rack.starting_unit,
            devices=tuple(
                PlacedDevice(
                    device_type=device.device_type,
                    position=device.position,
                    face=device.face,
                    name=device.name,
                )
                for device in config.rack.devices
            ),
        )
    except ValueError as e:
        raise ConfigError(
            message=f"Layout '{config.name}' is not valid: {e}",
            error_type="layout",
        )

    return Layout(
        name=config.name,
        rack=rack,
        device_types=device_types,
        settings=LayoutSettings(
            display_mode=config.settings.display_mode,
            show_labels_on_images=config.settings.show_labels_on_images,
        ),
        version=config.version,
    )


def layout_to_config(layout: Layout) -> LayoutConfiguration:
    """Convert a domain Layout back into its file model for saving."""
    return LayoutConfiguration(
        version=layout.version,
        name=layout.name,
        rack=RackConfig(
            name=layout.rack.name,
            height=layout.rack.height,
            width=layout.rack.width,
            desc_units=layout.rack.desc_units,
            form_factor=layout.rack.form_factor,
            starting_unit=layout.rack.starting_unit,
            devices=[
                PlacedDeviceConfig(
                    device_type=device.device_type,
                    position=device.position,
                    face=device.face,
                    name=device.name,
                )
                for device in layout.rack.devices
            ],
        ),
        device_types=[
            DeviceTypeConfig(
                slug=dt.slug,
                u_height=dt.u_height,
                manufacturer=dt.manufacturer,
                model=dt.model,
                is_full_depth=dt.is_full_depth,
                airflow=dt.airflow,
                weight=dt.weight,
                weight_unit=dt.weight_unit,
                comments=dt.comments,
                colour=dt.colour,
                category=dt.category,
                tags=list(dt.tags),
            )
            for dt in layout.device_types
        ],
        settings=LayoutSettingsConfig(
            display_mode=layout.settings.display_mode,
            show_labels_on_images=layout.settings.show_labels_on_images,
        ),
    )
