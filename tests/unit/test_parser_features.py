"""Tests for data, feature, pattern and resilience constructs."""

import textwrap

import pytest

from zerox.core import ast
from zerox.core.errors import ParseError
from zerox.core.parser import parse


def parse_top(source: str) -> ast.TopLevelNode:
    """Parse a single top-level construct."""
    (node,) = parse(textwrap.dedent(source).strip("\n") + "\n")
    return node


class TestModel:
    """Tests for model declarations."""

    def test_model(self) -> None:
        node = parse_top("""
            model Todo:
              title: str
              done: bool = false
              validate:
                title.length > 0 "Title is required"
              permission:
                delete: admin
              search: title
              sort: createdAt, title
        """)

        assert isinstance(node, ast.Model)
        assert [f.name for f in node.fields] == ["title", "done"]
        assert node.fields[1].default_value.value is False
        assert node.rules[0].message == "Title is required"
        assert node.permissions == [ast.ModelPermission(action="delete", role="admin")]
        assert node.search == ["title"]
        assert node.sort == ["createdAt", "title"]
        assert node.filter == []


class TestData:
    """Tests for data, form, table, realtime and emit."""

    def test_data_with_states(self, parse_one) -> None:
        node = parse_one("""
            data todos = api.get("/todos"):
              loading: skeleton
              error: "Could not load todos"
              empty: "Nothing here yet"
        """)

        assert isinstance(node, ast.DataDecl)
        assert isinstance(node.query, ast.CallExpr)
        assert node.loading.name == "skeleton"
        assert node.error == "Could not load todos"
        assert node.empty == "Nothing here yet"

    def test_data_without_states(self, parse_one) -> None:
        node = parse_one("data users = fetchUsers()")
        assert node.loading is None
        assert node.error is None

    def test_data_unknown_option(self, parse_body) -> None:
        with pytest.raises(ParseError, match="Unknown data option 'retries'"):
            parse_body("""
                data todos = load():
                  retries: 3
            """)

    def test_form(self, parse_one) -> None:
        node = parse_one("""
            form signup:
              field email: str
                label: "Email"
                required: "Email is required"
                format: email "Enter a valid email"
              field age: int
                min: 18 "Must be an adult"
                placeholder: "Age"
              submit "Join" -> register(signup):
                success: navigate("/welcome")
        """)

        assert isinstance(node, ast.FormDecl)
        email, age = node.fields
        assert email.label == "Email"
        assert [v.rule for v in email.validations] == ["required", "format"]
        assert email.validations[1].value.value == "email"
        assert age.label == "age"
        assert age.validations[0].rule == "min"
        assert age.validations[0].value.value == 18
        assert age.props["placeholder"].value == "Age"
        assert node.submit.label == "Join"
        assert isinstance(node.submit.action, ast.CallExpr)
        assert node.submit.success is not None
        assert node.submit.error is None

    def test_form_rejects_other_lines(self, parse_body) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_body("""
                form signup:
                  button "Go"
            """)
        assert exc_info.value.message == "Expected 'field' or 'submit', got KEYWORD 'button'"

    def test_table(self, parse_one) -> None:
        node = parse_one("""
            table users:
              column "Name" name sortable searchable
              column "Joined" createdAt format=date
              select
              actions: [edit, delete]
              features:
                pagination: 20
        """)

        assert isinstance(node, ast.Table)
        assert node.data_source == "users"
        assert [c.kind for c in node.columns] == ["field", "field", "select", "actions"]
        name = node.columns[0]
        assert (name.sortable, name.searchable, name.filterable) == (True, True, False)
        assert node.columns[1].format == "date"
        assert node.columns[3].actions == ["edit", "delete"]
        assert node.features["pagination"].value == 20

    def test_table_unknown_column_modifier(self, parse_body) -> None:
        with pytest.raises(ParseError, match="Unknown column modifier 'bold'"):
            parse_body("""
                table users:
                  column "Name" name bold
            """)

    def test_realtime(self, parse_one) -> None:
        node = parse_one("""
            realtime chat = subscribe("room"):
              on message: messages.push(event)
              on typing:
                typing = true
        """)

        assert isinstance(node, ast.RealtimeDecl)
        assert node.channel.value == "room"
        assert [h.event for h in node.handlers] == ["message", "typing"]

    def test_realtime_plain_channel(self, parse_one) -> None:
        node = parse_one("realtime feed = channel")
        assert node.channel.name == "channel"
        assert node.handlers == []

    def test_emit(self, parse_body) -> None:
        typing, ping = parse_body("""
            emit "typing" data=user.id to=room
            emit "ping"
        """)

        assert isinstance(typing, ast.Emit)
        assert isinstance(typing.data, ast.MemberExpr)
        assert list(typing.props) == ["to"]
        assert isinstance(ping.data, ast.NullLiteral)


class TestAppFeatures:
    """Tests for auth, routing, roles, automation and dev."""

    def test_auth(self) -> None:
        node = parse_top("""
            auth provider="supabase":
              login: email, password
              signup: email, password, name
              logout
              guard: admin -> redirect("/login")
        """)

        assert isinstance(node, ast.AuthDecl)
        assert node.provider == "supabase"
        assert node.login_fields == ["email", "password"]
        assert node.signup_fields == ["email", "password", "name"]
        assert node.logout is True
        assert node.guards == [ast.AuthGuard(role="admin", redirect="/login")]

    def test_auth_unknown_option(self) -> None:
        with pytest.raises(ParseError, match="Unknown auth option 'oauth'"):
            parse_top("""
                auth:
                  oauth: google
            """)

    def test_route(self) -> None:
        node = parse_top("""
            route "/admin":
              page Dashboard
              guard: admin
        """)

        assert node.path == "/admin"
        assert node.target == "Dashboard"
        assert node.guard == "admin"

    def test_roles(self) -> None:
        node = parse_top("""
            roles:
              admin:
                can: read, write, delete
              viewer
        """)

        assert node.roles == [
            ast.Role(name="admin", can=["read", "write", "delete"]),
            ast.Role(name="viewer", can=[]),
        ]

    def test_automation(self) -> None:
        node = parse_top("""
            automation:
              trigger "user.signup"
                sendWelcome(event.user)
              schedule "0 9 * * 1":
                sendReport()
        """)

        assert node.triggers[0].event == "user.signup"
        assert len(node.triggers[0].actions) == 1
        assert node.schedules[0].cron == "0 9 * * 1"

    def test_dev(self) -> None:
        node = parse_top("""
            dev:
              port: 3000
        """)
        assert node.props["port"].value == 3000


class TestWidgets:
    """Tests for dashboard widgets and overlays."""

    def test_chart(self, parse_body) -> None:
        revenue, sales = parse_body("""
            chart line revenue:
              data: monthly
            chart sales:
        """)

        assert revenue.chart_type == "line"
        assert revenue.name == "revenue"
        assert revenue.props["data"].name == "monthly"
        assert sales.chart_type == "bar"

    def test_stats_grid(self, parse_one) -> None:
        node = parse_one("""
            stats 3:
              stat "Users" value=userCount change=12 icon="users"
              stat "Revenue"
        """)

        assert isinstance(node, ast.StatsGrid)
        assert node.cols == 3
        users, revenue = node.stats
        assert users.value.name == "userCount"
        assert users.change.value == 12
        assert users.icon == "users"
        assert revenue.value.value == 0

    def test_stats_grid_only_holds_stats(self, parse_body) -> None:
        with pytest.raises(ParseError, match="Expected 'stat', got KEYWORD 'text'"):
            parse_body("""
                stats:
                  text "x"
            """)

    def test_nav(self, parse_one) -> None:
        node = parse_one("""
            nav sticky:
              link "Home" href="/" icon="home"
              link "About"
        """)

        assert node.props["sticky"].value is True
        assert node.items == [
            ast.NavLink(label="Home", href="/", icon="home"),
            ast.NavLink(label="About", href="#", icon=None),
        ]

    def test_upload(self, parse_one) -> None:
        node = parse_one("""
            upload avatar:
              accept: "image/*"
              maxSize: 5
              preview
              action: save(file)
        """)

        assert node.accept == "image/*"
        assert node.max_size == 5
        assert node.preview is True
        assert isinstance(node.action, ast.CallExpr)

    def test_upload_unknown_option(self, parse_body) -> None:
        with pytest.raises(ParseError, match="Unknown upload option 'bucket'"):
            parse_body("""
                upload avatar:
                  bucket: "files"
            """)

    def test_modal(self, parse_body) -> None:
        edit, info = parse_body("""
            modal editTodo title="Edit" trigger="Open":
              input title
            modal info:
              text "Hi"
        """)

        assert edit.title == "Edit"
        assert edit.trigger == "Open"
        assert isinstance(edit.body[0], ast.Input)
        assert info.title == "info"
        assert info.trigger is None

    def test_toast(self, parse_body) -> None:
        saved, plain = parse_body("""
            toast "Saved" type=success duration=3000
            toast "Hi"
        """)

        assert saved.toast_type == "success"
        assert saved.duration == 3000
        assert plain.toast_type == "info"
        assert plain.duration is None


class TestPatterns:
    """Tests for higher-level UI patterns."""

    def test_crud(self, parse_one) -> None:
        node = parse_one("crud Todo paginate=20")
        assert node.model == "Todo"
        assert node.props["paginate"].value == 20

    def test_list(self, parse_one) -> None:
        node = parse_one("""
            list kanban tasks group=status:
              text item.title
        """)

        assert isinstance(node, ast.List)
        assert node.list_type == "kanban"
        assert node.data_source.name == "tasks"
        assert node.props["group"].name == "status"
        assert len(node.body) == 1

    def test_drawer(self, parse_one) -> None:
        node = parse_one("""
            drawer settings side=right:
              toggle darkMode
        """)
        assert node.name == "settings"
        assert node.props["side"].name == "right"
        assert node.body[0].binding == "darkMode"

    def test_command(self, parse_body) -> None:
        custom, default = parse_body("""
            command "cmd+p"
            command
        """)
        assert custom.shortcut == "cmd+p"
        assert default.shortcut == "ctrl+k"

    def test_confirm(self, parse_one) -> None:
        node = parse_one('confirm "Delete this item?" danger confirm="Delete" description="Forever"')

        assert node.message == "Delete this item?"
        assert node.danger is True
        assert node.confirm_label == "Delete"
        assert node.cancel_label == "Cancel"
        assert node.description == "Forever"
        assert node.props == {}

    def test_pay_and_cart(self, parse_body) -> None:
        pay, cart = parse_body("""
            pay checkout provider="paddle" price=plan.price
            cart
        """)

        assert pay.pay_type == "checkout"
        assert pay.provider == "paddle"
        assert isinstance(pay.props["price"], ast.MemberExpr)
        assert isinstance(cart, ast.Cart)

    def test_media_and_gallery(self, parse_body) -> None:
        video, photos = parse_body("""
            media video intro.url autoplay
            gallery photos
        """)

        assert video.media_type == "video"
        assert isinstance(video.src, ast.MemberExpr)
        assert video.props["autoplay"].value is True
        assert photos.media_type == "gallery"
        assert photos.src.name == "photos"

    def test_search(self, parse_body) -> None:
        products, quick = parse_body("""
            search global products:
              text result.name
            search placeholder="Find"
        """)

        assert products.target == "products"
        assert len(products.body) == 1
        assert quick.search_type == "global"
        assert quick.target == ""
        assert quick.props["placeholder"].value == "Find"

    def test_social_profile_and_filter(self, parse_body) -> None:
        social, profile, filt, notification = parse_body("""
            social like post.id
            profile currentUser
            filter products
            notification push
        """)

        assert social.social_type == "like"
        assert isinstance(social.target, ast.MemberExpr)
        assert profile.user.name == "currentUser"
        assert filt.target == "products"
        assert notification.notification_type == "push"

    def test_landing_sections(self, parse_body) -> None:
        body = parse_body("""
            hero:
              text "Build faster"
            features
            pricing:
              plans: tiers
            faq
            testimonials
            footer
        """)

        assert [type(n) for n in body] == [
            ast.Hero,
            ast.Features,
            ast.Pricing,
            ast.Faq,
            ast.Testimonial,
            ast.Footer,
        ]
        assert len(body[0].body) == 1
        assert body[2].props["plans"].name == "tiers"

    def test_admin_seo_and_a11y(self, parse_body) -> None:
        admin, seo, a11y = parse_body("""
            admin cms
            seo:
              title: "Home"
            a11y:
              skipLinks: true
        """)

        assert admin.admin_type == "cms"
        assert seo.props["title"].value == "Home"
        assert a11y.props["skipLinks"].value is True

    def test_animate_and_gesture(self, parse_body) -> None:
        animate, swipe, drag = parse_body("""
            animate enter fade=300:
              text "Hello"
            gesture swipe card -> dismiss()
            gesture box
        """)

        assert animate.animation_type == "enter"
        assert animate.props["fade"].value == 300
        assert swipe.gesture_type == "swipe"
        assert isinstance(swipe.action, ast.CallExpr)
        assert drag.gesture_type == "drag"
        assert isinstance(drag.action, ast.NullLiteral)

    def test_ai(self, parse_body) -> None:
        chat, summary = parse_body("""
            ai .chat model="gpt":
              text "Ask me anything"
            ai summarize
        """)

        assert chat.ai_type == "chat"
        assert chat.props["model"].value == "gpt"
        assert len(chat.body) == 1
        assert summary.ai_type == "summarize"

    def test_breadcrumb(self, parse_one) -> None:
        node = parse_one('breadcrumb separator="/"')
        assert node.props["separator"].value == "/"

    def test_responsive(self, parse_body) -> None:
        mobile, tablet = parse_body("""
            mobile hide:
              breadcrumb
            responsive tablet show:
              text "Tablet only"
        """)

        assert (mobile.breakpoint, mobile.action) == ("mobile", "hide")
        assert isinstance(mobile.body[0], ast.Breadcrumb)
        assert (tablet.breakpoint, tablet.action) == ("tablet", "show")


class TestResilience:
    """Tests for error boundaries, loading, offline, retry and log."""

    def test_error_boundary(self, parse_one) -> None:
        node = parse_one("""
            error boundary:
              fallback:
                text "Something went wrong"
              on error:
                reportError(error)
              reportTo = "sentry"
        """)

        assert isinstance(node, ast.ErrorBoundary)
        assert node.error_type == "boundary"
        assert len(node.fallback) == 1
        assert isinstance(node.handler[0], ast.ExprStmt)
        assert node.props["reportTo"].value == "sentry"

    def test_error_boundary_rejects_ui_lines(self, parse_body) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_body("""
                error global:
                  text "x"
            """)
        assert exc_info.value.message == (
            "Expected 'fallback:', 'on' or a setting, got KEYWORD 'text'"
        )

    def test_loading(self, parse_one) -> None:
        node = parse_one("""
            loading skeleton:
              text "Loading..."
        """)
        assert node.loading_type == "skeleton"
        assert len(node.body) == 1

    def test_offline_strategies(self, parse_body) -> None:
        hyphenated, quoted, default = parse_body("""
            offline network-first:
              text "a"
            offline "stale-while-revalidate":
              text "b"
            offline:
              text "c"
        """)

        assert hyphenated.strategy == "network-first"
        assert quoted.strategy == "stale-while-revalidate"
        assert default.strategy == "cache-first"

    def test_retry(self, parse_one) -> None:
        node = parse_one("""
            retry 3 linear:
              delay: 1000
              action: fetchData()
        """)

        assert node.max_retries.value == 3
        assert node.backoff == "linear"
        assert node.delay.value == 1000
        assert isinstance(node.action, ast.CallExpr)

    def test_retry_unknown_option(self, parse_body) -> None:
        with pytest.raises(ParseError, match="Unknown retry option 'jitter'"):
            parse_body("""
                retry 3:
                  jitter: true
            """)

    def test_log(self, parse_body) -> None:
        slow, plain = parse_body("""
            log warn "Slow response", elapsed
            log "hi"
        """)

        assert slow.level == "warn"
        assert slow.message.value == "Slow response"
        assert slow.data.name == "elapsed"
        assert plain.level == "info"
        assert plain.data is None


class TestInfra:
    """Tests for deployment and infrastructure blocks."""

    def test_deploy(self) -> None:
        node = parse_top("""
            deploy vercel:
              region: "icn1"
        """)
        assert node.provider == "vercel"
        assert node.props["region"].value == "icn1"

    def test_env(self) -> None:
        node = parse_top("""
            env production:
              API_URL = "https://api.example.com"
              secret STRIPE_KEY = "sk_live"
        """)

        assert node.env_type == "production"
        assert [(v.name, v.secret) for v in node.variables] == [
            ("API_URL", False),
            ("STRIPE_KEY", True),
        ]

    def test_env_defaults_to_all(self) -> None:
        node = parse_top("""
            env:
              DEBUG = true
        """)
        assert node.env_type == "all"

    def test_docker(self) -> None:
        custom, default = parse("""docker "python:3.12":
  port: 8000
docker
""")
        assert custom.base_image == "python:3.12"
        assert custom.props["port"].value == 8000
        assert default.base_image == "node:20-alpine"
        assert default.props == {}

    def test_ci(self) -> None:
        node = parse_top("""
            ci github:
              on push
              on pull_request
              build = "npm run build"
        """)

        assert node.provider == "github"
        assert node.triggers == ["push", "pull_request"]
        assert node.steps[0].name == "build"
        assert node.steps[0].command.value == "npm run build"

    def test_domain_cdn_monitor_backup(self) -> None:
        domain, cdn, monitor, backup = parse("""domain "example.com":
  ssl: true
cdn:
  cache: "1d"
monitor:
  dsn: "x"
backup:
  retain: 30
""")

        assert domain.domain == "example.com"
        assert domain.props["ssl"].value is True
        assert cdn.provider == "cloudflare"
        assert monitor.provider == "sentry"
        assert backup.strategy == "daily"
        assert backup.props["retain"].value == 30


class TestBackend:
    """Tests for endpoints, jobs, caching, migrations and storage."""

    def test_endpoint(self) -> None:
        node = parse_top("""
            endpoint POST "/api/todos" middleware auth:
              let todo = db.todos.create(body)
              return todo
        """)

        assert isinstance(node, ast.Endpoint)
        assert node.method == "POST"
        assert node.path == "/api/todos"
        assert node.middleware == ["auth"]
        assert [type(s) for s in node.handler] == [ast.VarDecl, ast.ReturnStmt]

    def test_endpoint_lowercase_method_and_bare_path(self) -> None:
        node = parse_top("""
            endpoint get users:
              return db.users.all()
        """)
        assert node.method == "GET"
        assert node.path == "/users"

    def test_middleware_and_queue(self) -> None:
        middleware, queue = parse("""middleware auth:
  if !request.user: return unauthorized()
queue emails:
  send(job.to, job.body)
""")

        assert isinstance(middleware.handler[0], ast.IfStmt)
        assert queue.name == "emails"
        assert len(queue.handler) == 1

    def test_cron(self) -> None:
        nightly, hourly = parse("""cron cleanup "0 3 * * *":
  db.sessions.deleteExpired()
cron ping:
  ping()
""")
        assert nightly.schedule == "0 3 * * *"
        assert hourly.schedule == "0 * * * *"

    def test_cache(self) -> None:
        products, sessions = parse("""cache products redis:
  ttl: 3600
  maxItems: 100
cache sessions
""")

        assert products.strategy == "redis"
        assert products.ttl.value == 3600
        assert list(products.props) == ["maxItems"]
        assert sessions.strategy == "memory"
        assert sessions.ttl is None

    def test_migrate(self) -> None:
        node = parse_top("""
            migrate addPriority:
              up:
                db.addColumn("todos", "priority")
              down:
                db.dropColumn("todos", "priority")
        """)

        assert node.name == "addPriority"
        assert len(node.up) == 1
        assert len(node.down) == 1

    def test_seed(self) -> None:
        inline, block = parse("""seed User 10: {name: faker.name()}
seed Todo:
  [{title: "a"}, {title: "b"}]
""")

        assert inline.model == "User"
        assert inline.count.value == 10
        assert isinstance(inline.data, ast.ObjectExpr)
        assert block.count is None
        assert isinstance(block.data, ast.ArrayExpr)

    def test_webhook(self) -> None:
        node = parse_top("""
            webhook stripe:
              handlePayment(body)
        """)
        assert node.path == "/webhooks/stripe"

    def test_storage(self) -> None:
        uploads, files = parse("""storage uploads r2:
  bucket: "user-files"
storage files:
  bucket: "docs"
""")
        assert uploads.provider == "r2"
        assert uploads.props["bucket"].value == "user-files"
        assert files.provider == "s3"


class TestTestingBlocks:
    """Tests for test, e2e, mock and fixture blocks."""

    def test_unit_test(self) -> None:
        node = parse_top("""
            test unit "adds a todo":
              addTodo("Buy milk")
              expect(todos.length == 1)
        """)

        assert isinstance(node, ast.Test)
        assert node.test_type == "unit"
        assert node.name == "adds a todo"
        assert len(node.body) == 2

    def test_test_names(self) -> None:
        named, unnamed = parse("""test integration checkout:
  placeOrder()
test:
  run()
""")
        assert (named.test_type, named.name) == ("integration", "checkout")
        assert (unnamed.test_type, unnamed.name) == ("unit", "unnamed")

    def test_e2e(self) -> None:
        node = parse_top("""
            e2e "signup flow":
              visit "/signup"
              fill "#email" = "a@b.c"
              click "#submit"
        """)

        assert node.name == "signup flow"
        assert [s.action for s in node.steps] == ["visit", "fill", "click"]
        assert node.steps[1].value.value == "a@b.c"
        assert node.steps[2].value is None

    def test_mock(self) -> None:
        node = parse_top("""
            mock api:
              GET "/users" => [{id: 1, name: "Kim"}]
              post "/users" => {ok: true}
              => "pong"
        """)

        assert node.target == "api"
        assert [(r.method, r.path) for r in node.responses] == [
            ("GET", "/users"),
            ("POST", "/users"),
            ("GET", "/"),
        ]

    def test_fixture(self) -> None:
        inline, block = parse("""fixture users: [{name: "Kim"}, {name: "Lee"}]
fixture admin:
  {name: "Root", role: "admin"}
""")
        assert len(inline.data.elements) == 2
        assert isinstance(block.data, ast.ObjectExpr)


class TestI18n:
    """Tests for i18n, locale and rtl blocks."""

    def test_i18n(self) -> None:
        node = parse_top("""
            i18n ko:
              ko:
                greeting = "안녕하세요"
                nav.home = "홈"
              en:
                greeting = "Hello"
                nav.home = home
        """)

        assert node.default_locale == "ko"
        assert node.locales == ["ko", "en"]
        ko, en = node.translations
        assert [e.key for e in ko.entries] == ["greeting", "nav.home"]
        assert ko.entries[0].value == "안녕하세요"
        assert en.entries[1].value == "home"

    def test_i18n_default_locale(self) -> None:
        node = parse_top("""
            i18n:
              en:
                greeting = "Hello"
        """)
        assert node.default_locale == "ko"
        assert node.locales == ["en"]

    def test_locale(self) -> None:
        node = parse_top("""
            locale:
              dateFormat: "YYYY-MM-DD"
        """)
        assert node.props["dateFormat"].value == "YYYY-MM-DD"

    def test_rtl(self) -> None:
        disabled, configured = parse("""rtl false
rtl:
  direction: auto
""")
        assert disabled.enabled is False
        assert disabled.props == {}
        assert configured.enabled is True
        assert configured.props["direction"].name == "auto"
