"""Tests for the Core orchestrator."""

import asyncio
from unittest.mock import Mock

import pytest

from conftest import emitted
from playercore import Core, Element, Size
from playercore.exceptions import ContainerCreationError, CoreDestroyedError, MissingPluginError
from playercore.protocols import ContainerEvent, CoreEvent
from playercore.sandbox import SandboxContainerFactory, SandboxMediaControl


async def settle(rounds: int = 5) -> None:
    """Let scheduled tasks run a few steps."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.mark.integration
@pytest.mark.asyncio
class TestCreateContainers:
    """Test initial container creation and the ready barrier."""

    async def test_core_becomes_ready(self, core, observer, parent):
        core.register_observer(observer)

        result = await core.create_containers()

        assert result is core
        assert core.is_ready
        assert [c.source for c in core.containers] == ["intro.mp4", "movie.mp4"]
        assert core.active_container is core.containers[0]
        assert core.el.parent is parent
        assert core.el.attributes["data-player"] == ""
        assert core.el.attributes["tabindex"] == 9999

    async def test_event_order(self, core, observer):
        core.register_observer(observer)

        await core.create_containers()

        assert emitted(observer) == [
            CoreEvent.CONTAINERS_CREATED,
            CoreEvent.CONTAINER_ACTIVE,
            CoreEvent.READY,
        ]

    async def test_containers_created_fires_before_rendering(self, core, parent):
        seen = {}

        class Listener:
            def on_core_event(self, event, **kwargs):
                if event == CoreEvent.CONTAINERS_CREATED:
                    seen["attached"] = core.el.parent is not None
                    seen["rendered"] = [c.render_calls for c in kwargs["containers"]]

        core.register_observer(Listener())
        await core.create_containers()

        assert seen == {"attached": False, "rendered": [0, 0]}
        assert all(c.el.parent is core.el for c in core.containers)

    async def test_ready_waits_for_every_container(self, core_options, platform):
        factory = SandboxContainerFactory(auto_ready=False)
        core = Core(core_options, factory, platform=platform)
        task = asyncio.ensure_future(core.create_containers())
        await settle()

        assert len(factory.created) == 2
        assert not core.is_ready

        factory.created[0].mark_ready()
        await settle()
        assert not core.is_ready

        factory.created[1].mark_ready()
        await asyncio.wait_for(task, timeout=0.1)
        assert core.is_ready
        core.destroy()

    async def test_no_sources_means_no_active_container(self, core, observer):
        core.options.sources = []
        core.register_observer(observer)

        await core.create_containers()

        assert core.is_ready
        assert core.active_container is None
        assert emitted(observer, CoreEvent.CONTAINER_ACTIVE) == [{"container": None}]

    async def test_factory_failure_propagates(self, core_options, platform):
        error = RuntimeError("no backend")
        core = Core(core_options, SandboxContainerFactory(error=error), platform=platform)

        with pytest.raises(ContainerCreationError) as exc_info:
            await core.create_containers()

        assert exc_info.value.__cause__ is error
        assert not core.is_ready
        core.destroy()

    async def test_render_seeds_sizes(self, core):
        await core.create_containers()

        assert core.player_info.current_size == Size(width=640, height=360)
        assert core.player_info.computed_size == Size(width=640, height=360)
        assert core.el.style == {"width": "640px", "height": "360px"}
        assert core.size.observing

    async def test_render_takes_missing_size_from_element(self, factory, platform):
        element = Element("div", client_width=300, client_height=150)
        core = Core({"sources": ["a.mp4"]}, factory, platform=platform, element=element)

        await core.create_containers()

        assert (core.options.width, core.options.height) == (300, 150)
        core.destroy()


@pytest.mark.integration
@pytest.mark.asyncio
class TestActiveContainer:
    """Test active-container notifications and the membership invariant."""

    async def test_setting_emits_once_with_new_value(self, core, observer):
        await core.create_containers()
        core.register_observer(observer)
        second = core.containers[1]

        core.active_container = second
        core.active_container = None

        assert emitted(observer, CoreEvent.CONTAINER_ACTIVE) == [
            {"container": second},
            {"container": None},
        ]

    async def test_destroyed_active_container_is_cleared(self, core, observer):
        await core.create_containers()
        core.register_observer(observer)
        first, second = core.containers

        first.destroy()

        assert core.containers == [second]
        assert core.active_container is None
        assert emitted(observer, CoreEvent.CONTAINER_ACTIVE) == [{"container": None}]

    async def test_destroying_inactive_container_keeps_active(self, core):
        await core.create_containers()
        first, second = core.containers

        second.destroy()

        assert core.active_container is first

    async def test_playback_accessors(self, core):
        assert core.get_current_playback() is None
        assert core.get_playback_type() is None

        await core.create_containers()

        assert core.get_current_container() is core.containers[0]
        assert core.get_current_playback().source == "intro.mp4"
        assert core.get_playback_type() == "vod"

    async def test_create_container(self, core):
        container = core.create_container("extra.mp4")

        assert container in core.containers
        assert container.el.parent is core.el


@pytest.mark.integration
@pytest.mark.asyncio
class TestLoad:
    """Test load() and configure()."""

    async def test_load_replaces_containers(self, core, observer):
        await core.create_containers()
        old = core.containers
        core.register_observer(observer)

        task = core.load(["trailer.mp4"], "video/mp4")

        assert [c.destroy_calls for c in old] == [1, 1]
        assert core.active_container is None
        assert core.containers == []
        assert emitted(observer, CoreEvent.CONTAINER_ACTIVE) == [{"container": None}]

        await task

        assert [c.source for c in core.containers] == ["trailer.mp4"]
        assert core.active_container is core.containers[0]
        assert core.options.mime_type == "video/mp4"
        assert emitted(observer)[-1] == CoreEvent.READY

    async def test_load_wraps_bare_source(self, core):
        await core.load("single.mp4")

        assert core.options.sources == ["single.mp4"]
        assert [c.source for c in core.containers] == ["single.mp4"]

    async def test_superseded_load_is_discarded(self, core, factory):
        factory.gate = asyncio.Event()
        first = core.load(["one.mp4"])
        await settle()
        second = core.load(["two.mp4"])
        await settle()
        assert factory.requests == 2

        factory.gate.set()

        assert await first == []
        await second
        by_source = {c.source: c for c in factory.created}
        assert set(by_source) == {"one.mp4", "two.mp4"}
        assert by_source["one.mp4"].destroy_calls == 1
        assert by_source["two.mp4"].destroy_calls == 0
        assert core.containers == [by_source["two.mp4"]]
        assert core.active_container is by_source["two.mp4"]

    async def test_reload_releases_pending_ready_barrier(self, core_options, platform):
        factory = SandboxContainerFactory(auto_ready=False)
        core = Core(core_options, factory, platform=platform)
        initial = asyncio.ensure_future(core.create_containers())
        await settle()
        assert len(core.containers) == 2

        task = core.load(["b.mp4"])
        await settle()
        core.containers[0].mark_ready()
        await task

        assert await asyncio.wait_for(initial, timeout=0.5) is core
        assert core.is_ready
        assert [c.source for c in core.containers] == ["b.mp4"]
        core.destroy()

    async def test_load_outside_event_loop_is_rejected_first(self, core):
        existing = core.create_container("a.mp4")

        def load_without_loop():
            core.load(["x.mp4"])

        # run in a worker thread, which has no running loop
        with pytest.raises(RuntimeError):
            await asyncio.to_thread(load_without_loop)

        assert existing.destroy_calls == 0
        assert core.containers == [existing]
        assert core.options.sources == ["intro.mp4", "movie.mp4"]
        assert core.container_manager.generation == 0

    async def test_load_failure_surfaces_in_task(self, core_options, platform):
        core = Core(core_options, SandboxContainerFactory(error=RuntimeError("boom")), platform=platform)

        with pytest.raises(ContainerCreationError):
            await core.load(["x.mp4"])
        core.destroy()

    async def test_configure_with_sources_reloads(self, core):
        await core.create_containers()
        old = core.containers

        task = core.configure({"sources": ["new.mp4"]})

        assert task is not None
        assert all(c.destroy_calls == 1 for c in old)
        await task
        assert [c.source for c in core.containers] == ["new.mp4"]

    async def test_configure_with_single_source_reloads(self, core):
        await core.create_containers()

        await core.configure(source="alt.mp4", mime_type="video/webm")

        assert [c.source for c in core.containers] == ["alt.mp4"]
        assert core.options.mime_type == "video/webm"

    async def test_configure_with_empty_sources_reloads(self, core):
        await core.create_containers()
        old = core.containers

        task = core.configure({"sources": []})

        assert task is not None
        await task
        assert [c.destroy_calls for c in old] == [1, 1]
        assert core.containers == []
        assert core.options.sources == []
        assert core.active_container is None

    async def test_configure_without_sources_updates_in_place(self, core, observer):
        await core.create_containers()
        containers = core.containers
        core.register_observer(observer)

        result = core.configure({"volume": 5})

        assert result is None
        assert core.options.volume == 5
        assert core.containers == containers
        for container in containers:
            assert container.destroy_calls == 0
            assert container.configured_with == [core.options]
        assert emitted(observer, CoreEvent.OPTIONS_CHANGE) == [{"options": core.options}]


@pytest.mark.integration
@pytest.mark.asyncio
class TestFullscreenAndSize:
    """Test fullscreen re-synchronization and resize broadcasting."""

    async def test_toggle_twice_emits_one_pair(self, core, observer):
        await core.create_containers()
        core.register_observer(observer)

        core.toggle_fullscreen()
        assert core.player_info.current_size == Size(width=1920, height=1080)
        assert core.el.has_class("fullscreen")

        core.toggle_fullscreen()

        assert emitted(observer, CoreEvent.FULLSCREEN) == [{"fullscreen": True}, {"fullscreen": False}]
        assert not core.el.has_class("fullscreen")
        assert core.el.style == {"width": "640px", "height": "360px"}

    async def test_user_exit_resynchronizes(self, core, observer, document):
        await core.create_containers()
        core.toggle_fullscreen()
        core.register_observer(observer)

        document.exit_fullscreen()

        assert emitted(observer, CoreEvent.FULLSCREEN) == [{"fullscreen": False}]
        assert core.player_info.current_size == Size(width=640, height=360)

    async def test_fullscreen_change_shows_media_control(self, core):
        media_control = SandboxMediaControl()
        core.add_plugin(media_control)
        await core.create_containers()

        core.toggle_fullscreen()

        assert ("show", None) in media_control.calls

    async def test_media_control_can_request_toggle(self, core, document):
        await core.create_containers()

        core.trigger(CoreEvent.MEDIACONTROL_FULLSCREEN)

        assert document.fullscreen_element is core.el

    async def test_resize_is_scoped_to_instance(self, core, factory, platform, mediator):
        other = Core({"player_id": "player-2"}, factory, platform=platform, mediator=mediator)
        mine, theirs = Mock(), Mock()
        mediator.subscribe("player-1:resize", mine)
        mediator.subscribe("player-2:resize", theirs)

        core.resize({"width": 200, "height": 100})

        mine.assert_called_once_with(Size(width=200, height=100))
        theirs.assert_not_called()
        assert core.el.style == {"width": "200px", "height": "100px"}
        other.destroy()

    async def test_resize_follows_player_id_change(self, core, mediator):
        old, new = Mock(), Mock()
        mediator.subscribe("player-1:resize", old)
        mediator.subscribe("player-x:resize", new)

        core.configure({"player_id": "player-x"})
        core.resize({"width": 200, "height": 100})

        new.assert_called_once_with(Size(width=200, height=100))
        old.assert_not_called()

    async def test_resize_with_percentages(self, core):
        core.resize(Size(width="50%", height="50%"))

        assert core.el.style == {"width": "50%", "height": "50%"}
        assert (core.options.width, core.options.height) == ("50%", "50%")


@pytest.mark.integration
@pytest.mark.asyncio
class TestMediaControl:
    """Test media-control delegation."""

    async def test_plugin_is_rendered_into_widget(self, core):
        media_control = SandboxMediaControl()
        core.add_plugin(media_control)

        assert core.has_plugin("media_control")
        assert core.media_control is media_control
        assert media_control.el.parent is core.el

    async def test_show_and_hide_delegate(self, core):
        media_control = SandboxMediaControl()
        core.add_plugin(media_control)

        core.el.dispatch("mousemove", "move-event")
        core.el.dispatch("mouseleave", "leave-event")

        assert media_control.calls == [("show", "move-event"), ("hide", 2.0)]

    async def test_enable_disable(self, core):
        media_control = SandboxMediaControl()
        core.add_plugin(media_control)
        core.el.add_class("nocursor")

        core.disable_media_control()
        assert not media_control.enabled
        assert not core.el.has_class("nocursor")

        core.enable_media_control()
        assert media_control.enabled

    @pytest.mark.parametrize(
        "operation",
        ["show_media_control", "hide_media_control", "enable_media_control", "disable_media_control"],
    )
    async def test_missing_media_control_fails(self, core, operation):
        with pytest.raises(MissingPluginError) as exc_info:
            getattr(core, operation)()

        assert exc_info.value.plugin_name == "media_control"

    async def test_cursor_hidden_only_when_hidden_in_fullscreen(self, core):
        await core.create_containers()
        active = core.active_container

        core.on_media_control_show(False)
        assert not core.el.has_class("nocursor")

        core.toggle_fullscreen()
        core.on_media_control_show(False)
        assert core.el.has_class("nocursor")

        core.on_media_control_show(True)
        assert not core.el.has_class("nocursor")
        assert active.received[-2:] == [ContainerEvent.MEDIACONTROL_HIDE, ContainerEvent.MEDIACONTROL_SHOW]

    async def test_visibility_reports_reach_active_container(self, core):
        media_control = SandboxMediaControl(core)
        core.add_plugin(media_control)
        await core.create_containers()

        media_control.show()
        media_control.hide()

        assert core.active_container.received == [
            ContainerEvent.MEDIACONTROL_SHOW,
            ContainerEvent.MEDIACONTROL_HIDE,
        ]

    async def test_hide_without_active_container(self, core):
        core.on_media_control_show(False)
        assert not core.el.has_class("nocursor")


@pytest.mark.integration
@pytest.mark.asyncio
class TestDestroy:
    """Test teardown."""

    async def test_destroy_tears_everything_down(self, core, document, parent):
        media_control = SandboxMediaControl()
        core.add_plugin(media_control)
        await core.create_containers()
        containers = core.containers

        core.destroy()

        assert core.destroyed
        assert not core.is_ready
        assert [c.destroy_calls for c in containers] == [1, 1]
        assert media_control.destroy_calls == 1
        assert core.containers == []
        assert core.el.parent is None
        assert core.el not in parent.children
        assert not core.size.observing
        assert not document.has_handlers("fullscreenchange")

    async def test_calls_after_destroy_fail(self, core):
        core.destroy()

        with pytest.raises(CoreDestroyedError):
            core.load("x.mp4")
        with pytest.raises(CoreDestroyedError):
            core.configure({"volume": 1})
        with pytest.raises(CoreDestroyedError):
            core.destroy()

    async def test_in_flight_load_is_discarded(self, core, factory):
        task = core.load(["late.mp4"])
        core.destroy()

        result = await task

        assert result == []
        assert core.containers == []
        assert factory.created[-1].destroy_calls == 1

    async def test_destroy_releases_pending_ready_barrier(self, core_options, platform):
        factory = SandboxContainerFactory(auto_ready=False)
        core = Core(core_options, factory, platform=platform)
        initial = asyncio.ensure_future(core.create_containers())
        await settle()
        assert len(core.containers) == 2

        core.destroy()

        assert await asyncio.wait_for(initial, timeout=0.5) is core
        assert not core.is_ready

    async def test_destroy_releases_load_waiting_for_readiness(self, core_options, platform):
        factory = SandboxContainerFactory(auto_ready=False)
        core = Core(core_options, factory, platform=platform)
        task = core.load(["late.mp4"])
        await settle()
        assert [c.source for c in core.containers] == ["late.mp4"]

        core.destroy()

        containers = await asyncio.wait_for(task, timeout=0.5)
        assert [c.destroy_calls for c in containers] == [1]
        assert not core.is_ready
